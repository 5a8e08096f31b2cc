"""View models for portfolio valuation outputs."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from stockfolio.domain.models import Holding, QuoteCacheEntry, Stock


@dataclass(frozen=True)
class HoldingWithQuote:
    """Holding joined with its stock and (possibly absent) cache entry."""

    holding: Holding
    stock: Stock
    quote: Optional[QuoteCacheEntry] = None


@dataclass(frozen=True)
class ComputedHolding:
    """Per-holding valuation. Price-derived fields are None when never fetched."""

    holding_id: str
    stock_id: str
    symbol: str
    name: str
    sector: str
    exchange: str
    quantity: Decimal
    purchase_price: Decimal
    investment: Decimal
    portfolio_percent: Decimal
    cmp: Optional[Decimal] = None
    present_value: Optional[Decimal] = None
    gain_loss: Optional[Decimal] = None
    gain_loss_percent: Optional[Decimal] = None
    pe_ratio: Optional[Decimal] = None
    latest_earning: Optional[date] = None
    last_error: Optional[str] = None
    cache_updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class SectorSummary:
    """Investment and value rolled up by raw sector label."""

    sector: str
    total_investment: Decimal
    total_present_value: Decimal
    total_gain_loss: Decimal
    total_gain_loss_percent: Decimal
    holding_count: int


@dataclass(frozen=True)
class PortfolioTotals:
    """Portfolio-level totals."""

    total_investment: Decimal = field(default_factory=lambda: Decimal("0"))
    total_present_value: Decimal = field(default_factory=lambda: Decimal("0"))
    total_gain_loss: Decimal = field(default_factory=lambda: Decimal("0"))
    total_gain_loss_percent: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass(frozen=True)
class PortfolioView:
    """Complete computed view of a portfolio."""

    holdings: tuple[ComputedHolding, ...] = ()
    sector_summary: tuple[SectorSummary, ...] = ()
    totals: PortfolioTotals = field(default_factory=PortfolioTotals)
