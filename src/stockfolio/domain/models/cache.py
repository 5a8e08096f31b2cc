"""Quote cache model: last known quote (or last failure) per stock."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass
class QuoteCacheEntry:
    """
    Last resolution outcome for one stock.

    IMPORTANT: Written only by the quote resolver, as a full-entry upsert.
    cmp == 0 means the last resolution produced no usable price; an absent
    entry means the stock was never refreshed.
    """

    stock_id: str
    cmp: Decimal = field(default_factory=lambda: Decimal("0"))
    pe_ratio: Optional[Decimal] = None
    latest_earning: Optional[date] = None
    last_error: Optional[str] = None
    updated_at: Optional[datetime] = field(default=None)
