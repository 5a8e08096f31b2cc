"""Pydantic schemas for API request/response."""

from stockfolio.api.schemas.market import (
    QuoteResponse,
    QuoteErrorResponse,
    RefreshRequest,
    RefreshResponse,
    SymbolMatchResponse,
    SymbolSearchResponse,
)
from stockfolio.api.schemas.portfolio import (
    PortfolioCreate,
    PortfolioRename,
    PortfolioResponse,
    HoldingCreateRequest,
    HoldingUpdateRequest,
    HoldingResponse,
    ComputedHoldingResponse,
    SectorSummaryResponse,
    PortfolioViewResponse,
    HoldingsListResponse,
    StockCacheResponse,
    StockResponse,
    StockListResponse,
)

__all__ = [
    "QuoteResponse",
    "QuoteErrorResponse",
    "RefreshRequest",
    "RefreshResponse",
    "SymbolMatchResponse",
    "SymbolSearchResponse",
    "PortfolioCreate",
    "PortfolioRename",
    "PortfolioResponse",
    "HoldingCreateRequest",
    "HoldingUpdateRequest",
    "HoldingResponse",
    "ComputedHoldingResponse",
    "SectorSummaryResponse",
    "PortfolioViewResponse",
    "HoldingsListResponse",
    "StockCacheResponse",
    "StockResponse",
    "StockListResponse",
]
