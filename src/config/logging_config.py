# src/config/logging_config.py

"""Per-run timestamped logging configuration for veribuy.

Every launch writes to its own ``logs/run_YYYYmmdd_HHMMSS.log`` at DEBUG.
The child loggers worth reading there:

- ``veribuy.search``: provider requests, retries and upstream failures
- ``veribuy.cache``: search cache hits, stores and evictions
- ``veribuy.session``: result loads per query
- ``veribuy.filters`` and ``veribuy.trust``: per-apply counts and scores
- ``veribuy.wishlist``, ``veribuy.alerts``, ``veribuy.coupons``,
  ``veribuy.history``: user collection changes
- ``veribuy.cli``, ``veribuy.ui``, ``veribuy.main``: front-end events

Only warnings and errors (retries, failed searches) reach stderr, and
nothing is logged to stdout, which carries the CLI's JSON.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

ROOT_LOGGER_NAME = "veribuy"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)

_CONSOLE_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    logs_dir: Path | None = None,
    console_level: int = logging.WARNING,
) -> Path:
    """Attach the per-run file and console handlers to ``veribuy``.

    Args:
        logs_dir: Directory for the run log (defaults to
            ``Settings.LOGS_DIR``).
        console_level: Minimum level echoed to stderr.

    Returns:
        The :class:`~pathlib.Path` of this run's log file.
    """
    target_dir = logs_dir or Settings.LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = target_dir / f"run_{stamp}.log"

    app_logger = logging.getLogger(ROOT_LOGGER_NAME)
    app_logger.setLevel(logging.DEBUG)

    # Repeated calls (tests, TUI restarts) keep the first handlers
    if app_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    app_logger.addHandler(file_handler)
    app_logger.addHandler(console_handler)

    app_logger.info("Logging initialised, run log at %s", log_file)
    return log_file
