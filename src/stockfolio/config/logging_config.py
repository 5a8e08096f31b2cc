"""Logging configuration."""

import logging
import sys
from typing import Optional

from stockfolio.config.settings import get_settings

# Chatty at INFO: per-request HTTP lines, SQL echo, yfinance retries
_QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore", "yfinance", "urllib3")


def setup_logging(level: Optional[str] = None) -> None:
    """
    Log to stdout at the configured level.

    Provider fallbacks and refresh summaries are logged under the
    stockfolio.* loggers; third-party libraries only surface warnings.
    """
    level_name = (level or get_settings().log_level).upper()

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)-7s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
