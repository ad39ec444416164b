# tests/test_formatting.py

"""Tests for shared display helpers."""

import unittest

from src.models.trust import Tone
from src.ui.formatting import fmt_rating, fmt_usd, safe_link, tone_style


class TestFormatting(unittest.TestCase):
    """fmt_usd, fmt_rating, safe_link and tone_style."""

    def test_fmt_usd(self) -> None:
        self.assertEqual(fmt_usd(12.0), "$12.00")
        self.assertEqual(fmt_usd(1234.5), "$1,234.50")
        self.assertEqual(fmt_usd(0.0), "$0.00")
        self.assertEqual(fmt_usd(None), "—")

    def test_fmt_rating(self) -> None:
        self.assertEqual(fmt_rating(4.56), "4.6★")
        self.assertEqual(fmt_rating(None), "—")

    def test_safe_link_accepts_http_urls(self) -> None:
        self.assertEqual(
            safe_link("https://ulta.com/p/1"), "https://ulta.com/p/1"
        )
        self.assertEqual(safe_link("http://x.example"), "http://x.example")

    def test_safe_link_rejects_other_values(self) -> None:
        for url in (None, "", "javascript:alert(1)", "/relative", "ftp://a.b"):
            with self.subTest(url=url):
                self.assertEqual(safe_link(url), "#")

    def test_tone_style(self) -> None:
        self.assertEqual(tone_style(Tone.BAD), "bold red")


if __name__ == "__main__":
    unittest.main()
