# src/cli/runner.py

"""Headless CLI search runner built on the shopping session."""

import json
import logging
import sys
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from src.config.settings import Settings
from src.filters.trust_scorer import aspect_scores, is_major_retailer
from src.models.filter_config import FilterConfig
from src.models.history_point import HistoryPoint
from src.models.product import Product
from src.services.coupon_engine import CouponEngine
from src.services.search_client import SearchError
from src.services.shopping_session import (
    ComparisonRow,
    ShoppingSession,
    ViewRow,
)
from src.ui.formatting import fmt_rating, fmt_usd, tone_style

logger = logging.getLogger("veribuy.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def load_products_file(path: Path) -> list[Product]:
    """Read a JSON list of product records (or ``{"items": [...]}``)."""
    with open(path, encoding="utf-8") as f:
        data: Any = json.load(f)
    if isinstance(data, dict):
        data = data.get("items", [])
    if not isinstance(data, list):
        return []
    return [Product.from_record(r) for r in data if isinstance(r, dict)]


def _rows_to_dicts(rows: list[ViewRow]) -> list[dict[str, object]]:
    """Serialise ranked rows to plain dicts for JSON output."""
    out: list[dict[str, object]] = []
    for row in rows:
        trust = row.ranked.trust
        record: dict[str, object] = dict(row.product.to_record())
        record.update(
            {
                "trust": {
                    "score": trust.score,
                    "tag": trust.tag.value,
                    "tone": trust.tone.value,
                    "reasons": list(trust.reasons),
                },
                "valueScore": round(row.ranked.value, 2),
                "discountedPrice": row.discounted_price,
                "majorRetailer": is_major_retailer(row.product.source),
            }
        )
        out.append(record)
    return out


def _print_results(rows: list[ViewRow]) -> None:
    """Render the ranked results as a Rich table."""
    table = Table(
        title=f"Results ({len(rows)} items)",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", max_width=50)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Rating", justify="center")
    table.add_column("Source", style="magenta")
    table.add_column("Trust", justify="center")
    table.add_column("Flag")
    table.add_column("Aspects", style="dim")

    for idx, row in enumerate(rows, 1):
        p = row.product
        trust = row.ranked.trust
        if row.discounted_price is not None:
            price = f"{fmt_usd(row.discounted_price)} after coupon"
        else:
            price = fmt_usd(p.price)
        reviews = (
            f"{p.reviews} reviews" if p.reviews is not None
            else "reviews n/a"
        )
        aspects = " · ".join(
            f"{name} {score:.1f}"
            for name, score in aspect_scores(trust.score).items()
        )
        table.add_row(
            str(idx),
            p.title[:50],
            price,
            f"{fmt_rating(p.rating)}\n{reviews}",
            p.source or "Unknown",
            Text(
                f"{trust.tag.value}: {trust.score}/100",
                style=tone_style(trust.tone),
            ),
            trust.first_reason or "No flags",
            aspects,
        )

    Console().print(table)


def _print_compare(rows: list[ComparisonRow], console: Console) -> None:
    """Render the top-offer comparison table on *console*."""
    table = Table(
        title="Compare top offers",
        show_lines=False,
        title_style="bold cyan",
    )
    table.add_column("Source", style="bold")
    table.add_column("Price", justify="right")
    table.add_column("Trust")
    table.add_column("Coupon", style="dim")
    for r in rows:
        table.add_row(
            r.source,
            fmt_usd(r.price),
            f"{r.trust_label} ({r.trust_score}/100)",
            r.coupon_status,
        )
    console.print(table)


def _print_history(
    product: Product, points: list[HistoryPoint], console: Console,
) -> None:
    """Render a simulated price history table on *console*."""
    table = Table(
        title=(
            f"History for: {product.title[:50]} "
            f"({product.source or 'Unknown'})"
        ),
        title_style="bold cyan",
    )
    table.add_column("Date")
    table.add_column("Price", justify="right", style="bold")
    table.add_column("Signal", style="dim")
    for pt in points:
        table.add_row(
            pt.date.strftime("%b %d"), fmt_usd(pt.price), pt.note
        )
    console.print(table)


async def cli_search(
    query: str,
    config: FilterConfig,
    coupon_code: str | None = None,
    input_path: str | None = None,
    output_format: str = "json",
    show_compare: bool = False,
    history_index: int | None = None,
    session: ShoppingSession | None = None,
) -> int:
    """Run a headless search and return an exit code (0=ok, 1=fail)."""
    session = session or ShoppingSession()
    session.state.config = config

    if input_path is not None:
        try:
            products = load_products_file(Path(input_path))
        except (OSError, ValueError) as exc:
            logger.error("Could not read %s: %s", input_path, exc)
            _err.print(f"[red]Could not read {input_path}: {exc}[/red]")
            return 1
        session.load_products(products, query=query)
        _err.print(
            f"[bold]Loaded:[/bold] {len(products)} products "
            f"[dim]from {input_path}[/dim]"
        )
    else:
        _err.print(f"[bold]Searching live prices:[/bold] {query}")
        try:
            await session.search(query)
        except SearchError as exc:
            logger.error("Search failed for '%s': %s", query, exc)
            _err.print(f"[red]Search error: {exc}[/red]")
            return 1
        _err.print(
            f"[green]✓ Live results loaded "
            f"({len(session.state.raw)})[/green]"
        )

    if coupon_code is not None:
        coupon = session.apply_coupon(coupon_code)
        _err.print(f"[dim]{CouponEngine.describe(coupon)}[/dim]")

    rows = session.view()
    if not rows:
        _err.print("[yellow]No products match the filters.[/yellow]")

    if output_format == "table":
        _print_results(rows)
    else:
        json.dump(
            _rows_to_dicts(rows),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    # Extra tables go to stderr in JSON mode so stdout stays parseable
    extras = Console() if output_format == "table" else _err

    if show_compare and rows:
        _print_compare(session.comparison_rows(), extras)

    if history_index is not None:
        found = session.history_for(history_index - 1)
        if found is None:
            _err.print(
                f"[yellow]No result #{history_index} to chart.[/yellow]"
            )
        else:
            product, points = found
            _print_history(product, points, extras)

    return 0 if rows else 1


def describe_limits() -> str:
    """One-line summary of the display limits (used in --help)."""
    return (
        f"compare shows the top {Settings.COMPARE_LIMIT} offers; "
        f"history shows {Settings.HISTORY_POINTS} weekly points"
    )
