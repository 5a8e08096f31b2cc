"""Pydantic schemas for portfolio and holding endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class PortfolioCreate(BaseModel):
    """Request schema for creating a user's portfolio."""

    user_id: str
    name: Optional[str] = None


class PortfolioRename(BaseModel):
    """Request schema for renaming a portfolio."""

    name: str


class PortfolioResponse(BaseModel):
    """Portfolio without valuation."""

    id: str
    user_id: str
    name: str
    created_at: Optional[datetime] = None


class HoldingCreateRequest(BaseModel):
    """Record a purchase; repeat purchases merge into the existing holding."""

    symbol: str
    quantity: Decimal
    purchase_price: Decimal
    name: Optional[str] = None
    sector: Optional[str] = None
    exchange: Optional[str] = None


class HoldingUpdateRequest(BaseModel):
    quantity: Optional[Decimal] = None
    purchase_price: Optional[Decimal] = None


class HoldingResponse(BaseModel):
    """A stored holding."""

    id: str
    portfolio_id: str
    stock_id: str
    quantity: float
    purchase_price: float


class ComputedHoldingResponse(BaseModel):
    """A holding with valuation; price-derived fields are null when never fetched."""

    id: str
    stock_id: str
    symbol: str
    name: str
    sector: str
    exchange: str
    quantity: float
    purchase_price: float
    investment: float
    portfolio_percent: float
    cmp: Optional[float] = None
    present_value: Optional[float] = None
    gain_loss: Optional[float] = None
    gain_loss_percent: Optional[float] = None
    pe_ratio: Optional[float] = None
    latest_earning: Optional[date] = None
    last_error: Optional[str] = None
    cache_updated_at: Optional[datetime] = None


class SectorSummaryResponse(BaseModel):
    sector: str
    total_investment: float
    total_present_value: float
    total_gain_loss: float
    total_gain_loss_percent: float
    holding_count: int


class PortfolioViewResponse(BaseModel):
    """Portfolio with computed holdings, sector summary and totals."""

    id: str
    user_id: str
    name: str
    created_at: Optional[datetime] = None
    total_investment: float
    total_present_value: float
    total_gain_loss: float
    total_gain_loss_percent: float
    holdings: list[ComputedHoldingResponse]
    sector_summary: list[SectorSummaryResponse]


class HoldingsListResponse(BaseModel):
    portfolio_id: str
    holdings: list[ComputedHoldingResponse]


class StockCacheResponse(BaseModel):
    """Last cached quote of a stock; cmp 0 with last_error set marks a failed refresh."""

    cmp: float
    pe_ratio: Optional[float] = None
    latest_earning: Optional[date] = None
    last_error: Optional[str] = None
    updated_at: Optional[datetime] = None


class StockResponse(BaseModel):
    """A stock from the catalogue, with its cached quote once refreshed."""

    id: str
    symbol: str
    name: str
    sector: str
    exchange: str
    cache: Optional[StockCacheResponse] = None


class StockListResponse(BaseModel):
    stocks: list[StockResponse]
