"""Request-facing market data operations: validated refreshes, quotes and ticker search."""

from typing import Optional

from stockfolio.core.exceptions import ProviderError, ValidationError
from stockfolio.core.symbols import normalize_symbol, unique_symbols
from stockfolio.domain.views import Quote, RefreshResult, SymbolMatch
from stockfolio.providers.market_data_provider import SymbolSearchProvider
from stockfolio.repositories.protocols import HoldingRepository
from stockfolio.services.quote_resolver import QuoteResolver

MIN_SEARCH_LENGTH = 2
SEARCH_LIMIT = 10


class MarketDataService:
    """
    Validates caller input, then delegates to the QuoteResolver.

    Input errors raise ValidationError before any provider is contacted;
    everything after that is reported in the returned data.
    """

    def __init__(
        self,
        resolver: QuoteResolver,
        holding_repo: HoldingRepository,
        symbol_search: Optional[SymbolSearchProvider] = None,
    ):
        self._resolver = resolver
        self._holding_repo = holding_repo
        self._symbol_search = symbol_search

    def refresh_quotes(self, symbols: Optional[list[str]]) -> RefreshResult:
        """Refresh the cache for an explicit symbol list."""
        if not symbols or not unique_symbols(symbols):
            raise ValidationError("Provide at least one symbol")
        return self._resolver.refresh(symbols)

    def refresh_portfolio(self, portfolio_id: str) -> RefreshResult:
        """Refresh the cache for every stock held in a portfolio."""
        symbols = self._holding_repo.list_symbols(portfolio_id)
        if not symbols:
            return RefreshResult()
        return self._resolver.refresh(symbols)

    def get_quote(self, symbol: Optional[str]) -> Quote:
        """Current quote for one symbol, without touching the cache."""
        normalized = normalize_symbol(symbol)
        if normalized is None:
            raise ValidationError("Query parameter 'symbol' is required")
        return self._resolver.get_quote(normalized)

    def search_symbols(self, query: Optional[str]) -> list[SymbolMatch]:
        """Upstream ticker lookup for at most SEARCH_LIMIT matches."""
        query = (query or "").strip()
        if len(query) < MIN_SEARCH_LENGTH:
            raise ValidationError(f"Search query must be at least {MIN_SEARCH_LENGTH} characters")
        if self._symbol_search is None:
            raise ProviderError("none", "Stock search is not available")
        return self._symbol_search.search_symbols(query, limit=SEARCH_LIMIT)
