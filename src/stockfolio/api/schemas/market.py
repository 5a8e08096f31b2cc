"""Pydantic schemas for market data endpoints."""

from datetime import date
from typing import Optional

from pydantic import BaseModel


class QuoteResponse(BaseModel):
    """Current quote for one symbol."""

    symbol: str
    cmp: float
    pe_ratio: Optional[float] = None
    latest_earning: Optional[date] = None


class QuoteErrorResponse(BaseModel):
    """Body returned when no provider had a price."""

    error: str
    cmp: Optional[float] = None


class RefreshRequest(BaseModel):
    """Refresh either an explicit symbol list or every symbol of a portfolio."""

    symbols: Optional[list[str]] = None
    portfolio_id: Optional[str] = None


class RefreshResponse(BaseModel):
    """Outcome of a batch refresh."""

    message: str
    updated: int
    errors: list[str]


class SymbolMatchResponse(BaseModel):
    symbol: str
    name: str
    exchange: str
    type: str


class SymbolSearchResponse(BaseModel):
    """Upstream ticker search hits."""

    stocks: list[SymbolMatchResponse]
