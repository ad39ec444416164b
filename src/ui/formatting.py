# src/ui/formatting.py

"""Display helpers shared by the CLI tables and the TUI."""

from urllib.parse import urlparse

from src.models.trust import Tone

# Rich style per trust tone
TONE_STYLES: dict[Tone, str] = {
    Tone.GOOD: "bold green",
    Tone.WARN: "bold yellow",
    Tone.BAD: "bold red",
}

# Status-line styles; "neutral" is the fallback
STATUS_STYLES: dict[str, str] = {
    "neutral": "dim",
    "good": "green",
    "warn": "yellow",
    "bad": "red",
}


def fmt_usd(value: float | None) -> str:
    """Format a USD amount, or an em dash when unknown."""
    if value is None:
        return "—"
    return f"${value:,.2f}"


def fmt_rating(value: float | None) -> str:
    """Format a star rating to one decimal place."""
    return f"{value:.1f}★" if value is not None else "—"


def safe_link(url: str | None) -> str:
    """Return *url* when it is an absolute http(s) URL, else ``#``."""
    if not url:
        return "#"
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return "#"
    return url


def tone_style(tone: Tone) -> str:
    return TONE_STYLES[tone]
