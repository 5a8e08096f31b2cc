"""Stub quote provider for offline/testing use."""

from datetime import date
from decimal import Decimal
from typing import Optional

from stockfolio.domain.views import QuotePartial, SymbolMatch


# Deterministic fake quotes: price, P/E ratio, latest earnings
_STUB_QUOTES: dict[str, tuple[Decimal, Optional[Decimal], Optional[date]]] = {
    "AAPL": (Decimal("185.50"), Decimal("29.10"), date(2024, 8, 1)),
    "GOOGL": (Decimal("142.75"), Decimal("24.30"), date(2024, 7, 23)),
    "MSFT": (Decimal("378.25"), Decimal("35.60"), date(2024, 7, 30)),
    "AMZN": (Decimal("178.50"), Decimal("50.20"), None),
    "TSLA": (Decimal("248.75"), None, date(2024, 7, 23)),
    "NVDA": (Decimal("485.25"), Decimal("65.40"), date(2024, 8, 28)),
    "RELIANCE": (Decimal("2945.30"), Decimal("28.75"), date(2024, 7, 19)),
    "TCS": (Decimal("3920.10"), Decimal("31.20"), date(2024, 7, 11)),
    "INFY": (Decimal("1570.45"), Decimal("24.90"), date(2024, 7, 18)),
    "HDFCBANK": (Decimal("1642.80"), Decimal("18.40"), date(2024, 7, 20)),
}


class StubQuoteProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Exchange suffixes (".NS", ".BO") are ignored when looking symbols up.
    Unknown symbols come back as an error partial, like an upstream miss.
    """

    name = "stub"

    def __init__(self, quotes: Optional[dict[str, tuple[Decimal, Optional[Decimal], Optional[date]]]] = None):
        self._quotes = dict(_STUB_QUOTES if quotes is None else quotes)

    def resolve_quote(self, symbol: str, exchange_hint: Optional[str] = None) -> QuotePartial:
        key = symbol.strip().upper().split(".")[0]
        if key not in self._quotes:
            return QuotePartial.failure(f"No stub quote for {symbol}")
        price, pe_ratio, earnings = self._quotes[key]
        return QuotePartial(price=price, pe_ratio=pe_ratio, earnings_date=earnings)

    def search_symbols(self, query: str, limit: int = 10) -> list[SymbolMatch]:
        """Known symbols containing the query, in sorted order."""
        needle = query.strip().upper()
        return [
            SymbolMatch(symbol=key, name=key, exchange="STUB", quote_type="EQUITY")
            for key in sorted(self._quotes)
            if needle in key
        ][:limit]
