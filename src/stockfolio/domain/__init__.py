"""Domain layer - pure business models with no external dependencies."""

from stockfolio.domain.models import (
    Stock,
    Portfolio,
    Holding,
    QuoteCacheEntry,
)

__all__ = [
    "Stock",
    "Portfolio",
    "Holding",
    "QuoteCacheEntry",
]
