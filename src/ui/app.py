# src/ui/app.py

"""Terminal UI for the veribuy decision-support engine."""

import logging
import webbrowser
from typing import cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import (
    Button,
    Checkbox,
    DataTable,
    Footer,
    Header,
    Input,
    Select,
    Static,
)

from src.config.settings import Settings
from src.filters.trust_scorer import is_major_retailer
from src.models.filter_config import FilterConfig, SortBy
from src.models.product import Product
from src.models.wishlist_entry import WishlistEntry
from src.services.coupon_engine import CouponEngine
from src.services.search_client import SearchError
from src.services.shopping_session import ShoppingSession
from src.ui.formatting import (
    STATUS_STYLES,
    fmt_rating,
    fmt_usd,
    safe_link,
    tone_style,
)

logger = logging.getLogger("veribuy.ui")

_SORT_LABELS: dict[SortBy, str] = {
    SortBy.BEST_VALUE: "Best value",
    SortBy.LOWEST: "Lowest price",
    SortBy.HIGHEST: "Highest rated",
    SortBy.MOST_REVIEWS: "Most reviews",
}

_FILTER_INPUTS = ("max_price", "min_rating")


class VeriBuyApp(App[object]):
    """Terminal UI for ranking, saving and tracking shopping results."""

    CSS_PATH = "styles.css"
    TITLE = "VeriBuy"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("w", "save_item", "Save"),
        Binding("h", "show_history", "History"),
        Binding("o", "open_link", "Open"),
        Binding("x", "remove_saved", "Unsave"),
        Binding("a", "remove_alert", "Drop alert"),
    ]

    def __init__(self, session: ShoppingSession | None = None) -> None:
        super().__init__()
        self.session = session or ShoppingSession()
        self.settings = Settings()
        self.status_text = "Ready"

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        sort_options = [
            (_SORT_LABELS[s], s.value) for s in SortBy
        ]

        yield Header()
        yield Container(
            Static("🛒 VeriBuy: trusted prices, ranked", id="title"),

            Horizontal(
                Input(
                    value=self.settings.QUICK_QUERIES[0],
                    placeholder="Search products...",
                    id="search_input",
                ),
                Button("Search", variant="primary", id="search_btn"),
                id="search_bar",
            ),

            Horizontal(
                *(
                    Button(q, id=f"quick_{i}", classes="quick")
                    for i, q in enumerate(self.settings.QUICK_QUERIES)
                ),
                id="quick_bar",
            ),

            Horizontal(
                Input(placeholder="Max price", id="max_price"),
                Input(placeholder="Min rating", id="min_rating"),
                Select(
                    sort_options,
                    value=SortBy.BEST_VALUE.value,
                    allow_blank=False,
                    id="sort_by",
                ),
                Checkbox("Strict trust", value=True, id="strict_trust"),
                Checkbox("Prefer major", value=False, id="prefer_major"),
                id="filters",
            ),

            Horizontal(
                Input(placeholder="Coupon code", id="coupon_code"),
                Button("Apply", id="coupon_btn"),
                Static(CouponEngine.describe(None), id="coupon_out"),
                id="coupon_bar",
            ),

            Static("Ready", id="status"),
            cast(
                DataTable[str | Text],
                DataTable(
                    id="results_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),
            Static("Compare top offers", classes="section"),
            cast(
                DataTable[str | Text],
                DataTable(id="compare_table", cursor_type="none"),
            ),

            Horizontal(
                Vertical(
                    Static("Wishlist", classes="section"),
                    DataTable(id="wishlist_table", cursor_type="row"),
                    id="wishlist_panel",
                ),
                Vertical(
                    Static("Price alerts", classes="section"),
                    Horizontal(
                        Input(placeholder="Alert name", id="alert_name"),
                        Button("Save alert", id="alert_btn"),
                        id="alert_bar",
                    ),
                    DataTable(id="alerts_table", cursor_type="row"),
                    id="alerts_panel",
                ),
                id="lists",
            ),

            Static("Price history (demo)", id="history_title",
                   classes="section"),
            DataTable(id="history_table", cursor_type="none"),
            id="main_container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Configure table columns and render the empty panels."""
        self._table("#results_table").add_columns(
            "Title", "Price", "Rating", "Source", "Trust", "Flag", "Seller"
        )
        self._table("#compare_table").add_columns(
            "Source", "Price", "Trust", "Coupon"
        )
        self._table("#wishlist_table").add_columns(
            "Title", "Source", "Price"
        )
        self._table("#alerts_table").add_columns(
            "Name", "Max", "Min rating", "Trust", "Saved"
        )
        self._table("#history_table").add_columns(
            "Date", "Price", "Signal"
        )
        self.refresh_wishlist()
        self.refresh_alerts()

    def _table(self, selector: str) -> DataTable[str | Text]:
        return cast(
            DataTable[str | Text], self.query_one(selector, DataTable)
        )

    def set_status(self, text: str, tone: str = "neutral") -> None:
        """Update the status line with a tone-coloured message."""
        self.status_text = text
        style = STATUS_STYLES.get(tone, STATUS_STYLES["neutral"])
        self.query_one("#status", Static).update(Text(text, style=style))

    # ── Events ───────────────────────────────────────────

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button click events."""
        button_id = event.button.id or ""
        if button_id == "search_btn":
            await self.perform_search()
        elif button_id.startswith("quick_"):
            index = int(button_id.removeprefix("quick_"))
            await self.quick_search(self.settings.QUICK_QUERIES[index])
        elif button_id == "coupon_btn":
            self.apply_coupon()
        elif button_id == "alert_btn":
            self.save_alert()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle Enter in the search, coupon and alert inputs."""
        if event.input.id == "search_input":
            await self.perform_search()
        elif event.input.id == "coupon_code":
            self.apply_coupon()
        elif event.input.id == "alert_name":
            self.save_alert()

    def on_input_changed(self, event: Input.Changed) -> None:
        """Re-filter live as the price/rating bounds are edited."""
        if event.input.id in _FILTER_INPUTS:
            self.apply_filters()

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        self.apply_filters()

    def on_select_changed(self, event: Select.Changed) -> None:
        self.apply_filters()

    def on_data_table_row_selected(
        self, event: DataTable.RowSelected
    ) -> None:
        """Open the selected result or saved item in the browser."""
        if event.data_table.id in ("results_table", "wishlist_table"):
            self.action_open_link()

    # ── Search & filters ─────────────────────────────────

    def read_config(self) -> FilterConfig:
        """Collect the filter widgets into a FilterConfig."""
        sort_value = self.query_one("#sort_by", Select).value
        return FilterConfig.from_inputs(
            max_price=self.query_one("#max_price", Input).value,
            min_rating=self.query_one("#min_rating", Input).value,
            sort_by=sort_value,
            strict=self.query_one("#strict_trust", Checkbox).value,
            prefer_major=self.query_one("#prefer_major", Checkbox).value,
        )

    async def perform_search(self) -> None:
        """Fetch live results for the search box query."""
        query = self.query_one("#search_input", Input).value.strip()
        if not query:
            self.notify("Please enter a search term", severity="warning")
            return

        self.set_status("Searching live prices…", "warn")
        try:
            await self.session.search(query)
        except SearchError as exc:
            logger.error("Search failed for '%s': %s", query, exc)
            self.set_status("Search error", "bad")
            self.notify(str(exc), severity="error")
            return

        self.set_status(
            f"Live results loaded ({len(self.session.state.raw)})", "good"
        )
        self.apply_filters()

    async def quick_search(self, query: str) -> None:
        """Run one of the preset queries through the search box."""
        self.query_one("#search_input", Input).value = query
        await self.perform_search()

    def apply_filters(self) -> None:
        """Recompute the ranked view from the current widgets."""
        self.session.update_config(self.read_config())
        self.populate_results()
        self.populate_compare()

    def populate_results(self) -> None:
        """Fill the results table with the ranked view."""
        table = self._table("#results_table")
        table.clear()
        for row in self.session.view():
            p = row.product
            trust = row.ranked.trust
            if row.discounted_price is not None:
                price = Text(
                    f"{fmt_usd(row.discounted_price)} after coupon",
                    style="bold green",
                )
            else:
                price = Text(
                    fmt_usd(p.price) if p.price is not None else "price n/a"
                )
            table.add_row(
                p.title[:60],
                price,
                fmt_rating(p.rating),
                p.source or "Unknown",
                Text(
                    f"{trust.tag.value}: {trust.score}/100",
                    style=tone_style(trust.tone),
                ),
                trust.first_reason or "No flags",
                "Major retailer"
                if is_major_retailer(p.source)
                else "Marketplace",
            )

    def populate_compare(self) -> None:
        """Fill the comparison table with the top offers."""
        table = self._table("#compare_table")
        table.clear()
        for r in self.session.comparison_rows():
            table.add_row(
                r.source,
                fmt_usd(r.price),
                f"{r.trust_label} ({r.trust_score}/100)",
                r.coupon_status,
            )

    # ── Coupon ───────────────────────────────────────────

    def apply_coupon(self) -> None:
        """Resolve the coupon input and refresh displayed prices."""
        code = self.query_one("#coupon_code", Input).value
        coupon = self.session.apply_coupon(code)
        self.query_one("#coupon_out", Static).update(
            CouponEngine.describe(coupon)
        )
        self.apply_filters()

    # ── Wishlist ─────────────────────────────────────────

    def _results_cursor(self) -> int | None:
        table = self._table("#results_table")
        if table.row_count == 0:
            return None
        return table.cursor_row

    def action_save_item(self) -> None:
        """Save the highlighted result to the wishlist."""
        index = self._results_cursor()
        if index is None:
            self.notify("No result selected", severity="warning")
            return
        if self.session.save_item(index) is None:
            self.notify("Already saved")
        self.refresh_wishlist()

    def _wishlist_cursor_entry(self) -> WishlistEntry | None:
        table = self._table("#wishlist_table")
        entries = self.session.wishlist()[
            : self.settings.WISHLIST_DISPLAY_LIMIT
        ]
        if table.row_count == 0 or table.cursor_row >= len(entries):
            return None
        return entries[table.cursor_row]

    def action_remove_saved(self) -> None:
        """Remove the highlighted wishlist entry."""
        entry = self._wishlist_cursor_entry()
        if entry is None:
            return
        self.session.remove_saved(entry.dedupe_key)
        self.refresh_wishlist()

    def refresh_wishlist(self) -> None:
        table = self._table("#wishlist_table")
        table.clear()
        entries = self.session.wishlist()
        for entry in entries[: self.settings.WISHLIST_DISPLAY_LIMIT]:
            table.add_row(
                entry.product.title[:40],
                entry.product.source or "Unknown",
                fmt_usd(entry.product.price),
            )

    # ── Alerts ───────────────────────────────────────────

    def save_alert(self) -> None:
        """Save the current filters under the alert name."""
        name_input = self.query_one("#alert_name", Input)
        self.session.update_config(self.read_config())
        if self.session.save_alert(name_input.value) is None:
            self.notify("Give the alert a name", severity="warning")
            return
        name_input.value = ""
        self.refresh_alerts()

    def action_remove_alert(self) -> None:
        """Remove the highlighted alert."""
        table = self._table("#alerts_table")
        alerts = self.session.alerts()[: self.settings.ALERTS_DISPLAY_LIMIT]
        if table.row_count == 0 or table.cursor_row >= len(alerts):
            return
        self.session.remove_alert(alerts[table.cursor_row].id)
        self.refresh_alerts()

    def refresh_alerts(self) -> None:
        table = self._table("#alerts_table")
        table.clear()
        for alert in self.session.alerts()[
            : self.settings.ALERTS_DISPLAY_LIMIT
        ]:
            table.add_row(
                alert.name,
                fmt_usd(alert.max_price),
                f"{alert.min_rating:g}" if alert.min_rating else "Any",
                "Strict trust" if alert.strict else "Standard",
                alert.created_at.strftime("%b %d, %H:%M"),
            )

    # ── History & links ──────────────────────────────────

    def action_show_history(self) -> None:
        """Show simulated price history for the highlighted result."""
        index = self._results_cursor()
        if index is None:
            return
        found = self.session.history_for(index)
        if found is None:
            return
        product, points = found
        self.query_one("#history_title", Static).update(
            f"History for: {product.title[:50]} "
            f"({product.source or 'Unknown'})"
        )
        table = self._table("#history_table")
        table.clear()
        for pt in points:
            table.add_row(
                pt.date.strftime("%b %d"), fmt_usd(pt.price), pt.note
            )

    def _selected_product(self) -> Product | None:
        """Highlighted saved item when the wishlist has focus, else result."""
        wishlist = self._table("#wishlist_table")
        if self.focused is wishlist:
            entry = self._wishlist_cursor_entry()
            return entry.product if entry is not None else None
        index = self._results_cursor()
        rows = self.session.view()
        if index is None or index >= len(rows):
            return None
        return rows[index].product

    def action_open_link(self) -> None:
        """Open the highlighted result or saved item in the browser."""
        product = self._selected_product()
        if product is None:
            return
        url = safe_link(product.link)
        if url == "#":
            self.notify("No link for this item", severity="warning")
            return
        webbrowser.open(url)
