"""Repository layer - data access abstractions and implementations."""

from stockfolio.repositories.protocols import (
    StockRepository,
    PortfolioRepository,
    HoldingRepository,
    QuoteCacheRepository,
)

__all__ = [
    "StockRepository",
    "PortfolioRepository",
    "HoldingRepository",
    "QuoteCacheRepository",
]
