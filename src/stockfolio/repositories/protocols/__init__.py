"""Repository protocol definitions (interfaces)."""

from stockfolio.repositories.protocols.stock_repo import StockRepository
from stockfolio.repositories.protocols.portfolio_repo import (
    PortfolioRepository,
    HoldingRepository,
)
from stockfolio.repositories.protocols.quote_cache_repo import QuoteCacheRepository

__all__ = [
    "StockRepository",
    "PortfolioRepository",
    "HoldingRepository",
    "QuoteCacheRepository",
]
