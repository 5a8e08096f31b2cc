"""Google Finance provider: scrapes P/E ratio and latest earnings from the quote page."""

import logging
import re
from typing import Optional
from urllib.parse import quote

import httpx

from stockfolio.domain.views import QuotePartial
from stockfolio.providers.google_finance_parser import parse_fundamentals

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.google.com/finance"
DEFAULT_MARKET = "NASDAQ"

# Internal exchange code -> Google Finance market code
EXCHANGE_MAP: dict[str, str] = {
    "NSE": "NSE",
    "BSE": "BSE",
    "NASDAQ": "NASDAQ",
    "NYSE": "NYSE",
    "NYSEARCA": "NYSEARCA",
    "BOM": "BSE",
}

_BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

_EXCHANGE_SUFFIX_RE = re.compile(r"\.(NS|BO|NSE|BSE|NASDAQ|NYSE|BOM)$", re.IGNORECASE)


def to_google_symbol(symbol: str) -> str:
    """Strip a trailing exchange token (e.g. ".NS"); keep the input if nothing is left."""
    return _EXCHANGE_SUFFIX_RE.sub("", symbol).strip() or symbol


def to_google_market(exchange: Optional[str]) -> str:
    code = (exchange or "").strip().upper()
    if not code:
        return DEFAULT_MARKET
    return EXCHANGE_MAP.get(code, code)


class GoogleFinanceProvider:
    """Supplementary fundamentals source; never reports a price."""

    name = "google_finance"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    def quote_url(self, symbol: str, exchange_hint: Optional[str]) -> str:
        clean = quote(to_google_symbol(symbol), safe="")
        market = quote(to_google_market(exchange_hint), safe="")
        return f"{self._base_url}/quote/{clean}:{market}"

    def resolve_quote(self, symbol: str, exchange_hint: Optional[str] = None) -> QuotePartial:
        url = self.quote_url(symbol, exchange_hint)
        try:
            with httpx.Client(
                timeout=self._timeout,
                headers=_BROWSER_HEADERS,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = client.get(url)
        except httpx.TimeoutException:
            logger.warning("Google Finance timed out for %s", symbol)
            return QuotePartial.failure(f"Google Finance timed out after {self._timeout:g}s")
        except httpx.HTTPError as exc:
            logger.warning("Google Finance request failed for %s: %s", symbol, exc)
            return QuotePartial.failure(str(exc) or "Failed to fetch from Google Finance")

        if not response.is_success:
            return QuotePartial.failure(f"Google Finance returned {response.status_code}")

        return parse_fundamentals(response.text)
