"""Quote cache repository protocol."""

from typing import Protocol, Optional

from stockfolio.domain.models import QuoteCacheEntry


class QuoteCacheRepository(Protocol):
    """Interface for the per-stock quote cache."""

    def get(self, stock_id: str) -> Optional[QuoteCacheEntry]:
        """Get the cache entry for a stock, if it was ever refreshed."""
        ...

    def get_many(self, stock_ids: list[str]) -> dict[str, QuoteCacheEntry]:
        """Get cache entries for several stocks, keyed by stock ID."""
        ...

    def upsert(self, entry: QuoteCacheEntry) -> QuoteCacheEntry:
        """Create or fully replace the entry for entry.stock_id."""
        ...
