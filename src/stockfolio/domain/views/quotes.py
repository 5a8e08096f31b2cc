"""View models for quote resolution outputs."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class QuotePartial:
    """What a single provider managed to find for one symbol."""

    price: Optional[Decimal] = None
    pe_ratio: Optional[Decimal] = None
    earnings_date: Optional[date] = None
    error_message: Optional[str] = None

    @property
    def has_price(self) -> bool:
        return self.price is not None and self.price > 0

    @classmethod
    def failure(cls, message: str) -> "QuotePartial":
        return cls(error_message=message)


@dataclass(frozen=True)
class Quote:
    """Consolidated quote for one symbol; cmp is 0 when no provider had a price."""

    symbol: str
    cmp: Decimal
    pe_ratio: Optional[Decimal] = None
    latest_earning: Optional[date] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RefreshResult:
    """Outcome of one batch refresh."""

    updated_count: int = 0
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SymbolMatch:
    """One upstream search hit for a ticker lookup."""

    symbol: str
    name: str
    exchange: str
    quote_type: str
