"""Stock repository protocol."""

from typing import Protocol, Optional

from stockfolio.domain.models import Stock


class StockRepository(Protocol):
    """Interface for stock catalogue access."""

    def get_by_id(self, stock_id: str) -> Optional[Stock]:
        """Retrieve stock by ID."""
        ...

    def find_by_symbol(self, symbol: str) -> Optional[Stock]:
        """Retrieve stock by normalized symbol."""
        ...

    def create(self, stock: Stock) -> Stock:
        """Persist a new stock."""
        ...

    def update(self, stock: Stock) -> Stock:
        """Update name, sector and exchange of an existing stock."""
        ...

    def search(self, search: Optional[str] = None, sector: Optional[str] = None) -> list[Stock]:
        """List stocks, optionally filtered by symbol/name text and sector."""
        ...
