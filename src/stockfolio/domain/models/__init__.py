"""Domain models package."""

from stockfolio.domain.models.stock import Stock, UNKNOWN_SECTOR
from stockfolio.domain.models.portfolio import Portfolio, Holding
from stockfolio.domain.models.cache import QuoteCacheEntry

__all__ = [
    "Stock",
    "UNKNOWN_SECTOR",
    "Portfolio",
    "Holding",
    "QuoteCacheEntry",
]
