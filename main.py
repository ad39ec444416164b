# main.py

"""Entry point for the veribuy application (TUI or headless CLI)."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.models.filter_config import FilterConfig, SortBy

logger = logging.getLogger("veribuy.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    from src.cli.runner import describe_limits

    parser = argparse.ArgumentParser(
        prog="veribuy",
        description=(
            "Rank shopping results by trust and value, with coupons, "
            "alerts and simulated price history."
        ),
        epilog=describe_limits(),
    )
    parser.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Search query. Omit to launch the interactive TUI.",
    )
    parser.add_argument(
        "-i",
        "--input",
        default=None,
        dest="input_path",
        help="Rank products from a JSON file instead of searching.",
    )
    parser.add_argument(
        "--max-price",
        default=None,
        help="Hide items priced above this amount.",
    )
    parser.add_argument(
        "--min-rating",
        default=None,
        help="Hide items rated below this (unrated items need 0).",
    )
    parser.add_argument(
        "--sort",
        choices=[s.value for s in SortBy],
        default=SortBy.BEST_VALUE.value,
        help="Primary sort order (default: bestValue).",
    )
    parser.add_argument(
        "--standard",
        action="store_true",
        default=False,
        help="Use standard instead of strict trust scoring.",
    )
    parser.add_argument(
        "--prefer-major",
        action="store_true",
        default=False,
        dest="prefer_major",
        help="Rank major retailers ahead of marketplace sellers.",
    )
    parser.add_argument(
        "-c",
        "--coupon",
        default=None,
        help="Coupon code to apply to displayed prices.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "--compare",
        action="store_true",
        default=False,
        help="Also print the top-offer comparison table.",
    )
    parser.add_argument(
        "--history",
        type=int,
        default=None,
        metavar="N",
        help="Also print simulated price history for result #N.",
    )
    return parser


def _run_tui() -> None:
    """Launch the interactive Textual TUI."""
    from src.ui.app import VeriBuyApp

    try:
        app = VeriBuyApp()
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("veribuy TUI shutting down")


def _run_cli(args: argparse.Namespace) -> None:
    """Run a headless search and exit."""
    from src.cli.runner import cli_search

    config = FilterConfig.from_inputs(
        max_price=args.max_price,
        min_rating=args.min_rating,
        sort_by=args.sort,
        strict=not args.standard,
        prefer_major=args.prefer_major,
    )
    exit_code = asyncio.run(
        cli_search(
            query=args.query,
            config=config,
            coupon_code=args.coupon,
            input_path=args.input_path,
            output_format=args.output_format,
            show_compare=args.compare,
            history_index=args.history,
        )
    )
    sys.exit(exit_code)


def main() -> None:
    """Route to the TUI (no query) or the headless CLI."""
    log_file = setup_logging()
    logger.info("veribuy starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()

    if args.query is None and args.input_path is None:
        _run_tui()
    else:
        if args.query is None:
            args.query = ""
        _run_cli(args)


if __name__ == "__main__":
    main()
