"""Portfolio and holding domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Portfolio:
    """A user's single portfolio (one per user)."""

    portfolio_id: str
    user_id: str
    name: str
    created_at: Optional[datetime] = field(default=None)


@dataclass
class Holding:
    """
    Position in one stock within one portfolio.

    At most one holding exists per (portfolio, stock); repeat purchases
    are merged into it with a weighted-average purchase price.
    """

    holding_id: str
    portfolio_id: str
    stock_id: str
    quantity: Decimal
    purchase_price: Decimal

    def merge_purchase(self, quantity: Decimal, price: Decimal) -> None:
        """Fold another purchase into this holding."""
        new_quantity = self.quantity + quantity
        total_cost = self.quantity * self.purchase_price + quantity * price
        self.purchase_price = total_cost / new_quantity
        self.quantity = new_quantity
