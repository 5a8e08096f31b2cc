"""
Yahoo Finance quote provider via yfinance.

Primary price source. Also yields trailing P/E and the latest earnings
timestamp when Yahoo reports them, and serves free-text ticker search.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from stockfolio.core.timezone import date_from_timestamp
from stockfolio.core.exceptions import ProviderError
from stockfolio.domain.views import QuotePartial, SymbolMatch

logger = logging.getLogger(__name__)


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


DEFAULT_FETCH_TIMEOUT_SECONDS = 10

# Internal exchange code -> Yahoo ticker suffix
EXCHANGE_SUFFIXES: dict[str, str] = {
    "NSE": ".NS",
    "BSE": ".BO",
    "BOM": ".BO",
}
_KNOWN_SUFFIXES = tuple(sorted(set(EXCHANGE_SUFFIXES.values())))


def to_yahoo_symbol(symbol: str, exchange: Optional[str]) -> str:
    """Append the Yahoo exchange suffix unless the symbol already carries one."""
    suffix = EXCHANGE_SUFFIXES.get((exchange or "").strip().upper())
    if not suffix or symbol.upper().endswith(_KNOWN_SUFFIXES):
        return symbol
    return f"{symbol}{suffix}"


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    # yfinance reports "Infinity" or NaN for some ratios
    return number if number.is_finite() else None


def parse_yahoo_info(info: Any) -> QuotePartial:
    """
    Map a yfinance ``info`` dict onto a QuotePartial.

    Price: currentPrice preferred, then regularMarketPrice. Zero or
    negative prices count as missing.
    """
    if not isinstance(info, dict):
        return QuotePartial.failure("Unexpected Yahoo Finance response")

    price = _to_decimal(info.get("currentPrice"))
    if price is None or price <= 0:
        price = _to_decimal(info.get("regularMarketPrice"))
    if price is not None and price <= 0:
        price = None

    pe_ratio = _to_decimal(info.get("trailingPE"))

    earnings_date = None
    for key in ("earningsTimestamp", "earningsTimestampStart"):
        ts = info.get(key)
        if ts:
            try:
                earnings_date = date_from_timestamp(ts)
            except (TypeError, ValueError, OverflowError, OSError):
                earnings_date = None
            if earnings_date is not None:
                break

    return QuotePartial(price=price, pe_ratio=pe_ratio, earnings_date=earnings_date)


def parse_search_quotes(quotes: Any) -> list[SymbolMatch]:
    """Map yfinance search quotes; entries without a symbol are skipped."""
    matches = []
    for quote in quotes or []:
        if not isinstance(quote, dict) or not quote.get("symbol"):
            continue
        symbol = quote["symbol"]
        matches.append(
            SymbolMatch(
                symbol=symbol,
                name=quote.get("shortname") or quote.get("longname") or symbol,
                exchange=quote.get("exchange") or quote.get("exchDisp") or "UNKNOWN",
                quote_type=quote.get("quoteType") or quote.get("typeDisp") or "EQUITY",
            )
        )
    return matches


def _fetch_info(yahoo_symbol: str) -> Any:
    """Call yfinance for one symbol. No timeout of its own."""
    yf = _get_yf()
    return yf.Ticker(yahoo_symbol).info


def _fetch_search_quotes(query: str, limit: int) -> Any:
    yf = _get_yf()
    return yf.Search(query, max_results=limit, news_count=0).quotes


class YahooFinanceProvider:
    """Fetches quotes from Yahoo Finance, bounded by a fetch timeout."""

    name = "yahoo"

    def __init__(self, fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS):
        self._fetch_timeout = fetch_timeout_seconds

    def resolve_quote(self, symbol: str, exchange_hint: Optional[str] = None) -> QuotePartial:
        yahoo_symbol = to_yahoo_symbol(symbol, exchange_hint)
        executor = ThreadPoolExecutor(max_workers=1)
        try:
            fut = executor.submit(_fetch_info, yahoo_symbol)
            info = fut.result(timeout=self._fetch_timeout)
        except FuturesTimeoutError:
            logger.warning("Yahoo Finance timed out for %s", yahoo_symbol)
            return QuotePartial.failure(
                f"Yahoo Finance timed out after {self._fetch_timeout:g}s"
            )
        except Exception as exc:
            logger.warning("Yahoo Finance failed for %s: %s", yahoo_symbol, exc)
            return QuotePartial.failure(str(exc) or "Failed to fetch quote")
        finally:
            # Do not block on a hung worker; the timeout has already fired.
            executor.shutdown(wait=False)
        return parse_yahoo_info(info)

    def search_symbols(self, query: str, limit: int = 10) -> list[SymbolMatch]:
        """Ticker lookup via yfinance.Search; failures raise ProviderError."""
        executor = ThreadPoolExecutor(max_workers=1)
        try:
            fut = executor.submit(_fetch_search_quotes, query, limit)
            quotes = fut.result(timeout=self._fetch_timeout)
        except FuturesTimeoutError:
            logger.warning("Yahoo Finance search timed out for %r", query)
            raise ProviderError(self.name, f"Stock search timed out after {self._fetch_timeout:g}s")
        except Exception as exc:
            logger.warning("Yahoo Finance search failed for %r: %s", query, exc)
            raise ProviderError(self.name, f"Failed to search stocks: {str(exc) or type(exc).__name__}") from exc
        finally:
            executor.shutdown(wait=False)
        return parse_search_quotes(quotes)[:limit]
