"""Quote provider protocol."""

from typing import Optional, Protocol

from stockfolio.domain.views import QuotePartial, SymbolMatch


class QuoteProvider(Protocol):
    """
    Protocol for upstream quote sources.

    Implementations issue at most a bounded number of outbound requests per
    call and never raise: timeouts, bad statuses and unparsable payloads
    come back as a QuotePartial with error_message set and value fields None.
    Fields a source simply does not carry are None without an error.
    """

    name: str

    def resolve_quote(self, symbol: str, exchange_hint: Optional[str] = None) -> QuotePartial:
        """Fetch what this source knows about one symbol."""
        ...


class SymbolSearchProvider(Protocol):
    """Upstream ticker lookup by free text. Raises ProviderError when the source fails."""

    name: str

    def search_symbols(self, query: str, limit: int = 10) -> list[SymbolMatch]:
        ...
