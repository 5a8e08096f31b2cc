"""Core utilities and shared functionality."""

from stockfolio.core.timezone import (
    now_utc,
    to_utc,
    date_from_timestamp,
    UTC,
)
from stockfolio.core.symbols import normalize_symbol, unique_symbols
from stockfolio.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    ProviderError,
)

__all__ = [
    "now_utc",
    "to_utc",
    "date_from_timestamp",
    "UTC",
    "normalize_symbol",
    "unique_symbols",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ProviderError",
]
