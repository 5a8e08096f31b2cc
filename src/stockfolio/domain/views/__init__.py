"""View models for service outputs."""

from stockfolio.domain.views.quotes import QuotePartial, Quote, RefreshResult, SymbolMatch
from stockfolio.domain.views.portfolio import (
    HoldingWithQuote,
    ComputedHolding,
    SectorSummary,
    PortfolioTotals,
    PortfolioView,
)

__all__ = [
    "QuotePartial",
    "Quote",
    "RefreshResult",
    "SymbolMatch",
    "HoldingWithQuote",
    "ComputedHolding",
    "SectorSummary",
    "PortfolioTotals",
    "PortfolioView",
]
