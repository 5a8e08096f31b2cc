"""
Backup price source: Yahoo Finance data proxied through RapidAPI.

Two RapidAPI hosts are supported. The "real-time" host serves
/stock/get-quote and, for symbols it does not quote, /stock/get-options;
the classic host serves /stock/v2/get-summary.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import httpx

from stockfolio.domain.views import QuotePartial

logger = logging.getLogger(__name__)

DEFAULT_HOST = "yh-finance.p.rapidapi.com"
REALTIME_HOST_MARKER = "yahoo-finance-real-time"
MISSING_KEY_MESSAGE = "RAPIDAPI_KEY not configured"

_PRICE_PATHS: tuple[tuple[Any, ...], ...] = (
    ("price", "regularMarketPrice", "raw"),
    ("price", "regularMarketPrice"),
    ("regularMarketPrice", "raw"),
    ("regularMarketPrice",),
    ("result", 0, "regularMarketPrice"),
    ("quoteResponse", "result", 0, "regularMarketPrice"),
)


def _dig(data: Any, path: tuple[Any, ...]) -> Any:
    for key in path:
        if isinstance(key, int):
            if not isinstance(data, list) or len(data) <= key:
                return None
        elif not isinstance(data, dict):
            return None
        data = data[key] if isinstance(key, int) else data.get(key)
    return data


def _positive_decimal(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = Decimal(str(value))
    elif isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None
    if not number.is_finite() or number <= 0:
        return None
    return number


def _price_from_shapes(data: Any) -> Optional[Decimal]:
    for path in _PRICE_PATHS:
        price = _positive_decimal(_dig(data, path))
        if price is not None:
            return price
    return None


def extract_price(data: Any) -> Optional[Decimal]:
    """
    Find a positive price in any of the known RapidAPI response shapes.

    Options payloads nest the underlying quote under optionChain.result[0].quote.
    """
    if data is None:
        return None
    price = _price_from_shapes(data)
    if price is None:
        price = _price_from_shapes(_dig(data, ("optionChain", "result", 0, "quote")))
    return price


class RapidApiProvider:
    """
    Backup price provider.

    Without an API key the provider is disabled: every call returns an
    error partial and no request is made.
    """

    name = "rapidapi"

    def __init__(
        self,
        api_key: Optional[str],
        host: str = DEFAULT_HOST,
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._api_key = api_key or None
        self._host = host or DEFAULT_HOST
        self._timeout = timeout_seconds
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return self._api_key is not None

    @property
    def is_realtime(self) -> bool:
        return REALTIME_HOST_MARKER in self._host

    def resolve_quote(self, symbol: str, exchange_hint: Optional[str] = None) -> QuotePartial:
        if not self.enabled:
            return QuotePartial.failure(MISSING_KEY_MESSAGE)

        headers = {"x-rapidapi-key": self._api_key, "x-rapidapi-host": self._host}
        base_url = f"https://{self._host}"
        path = "/stock/get-quote" if self.is_realtime else "/stock/v2/get-summary"

        try:
            with httpx.Client(
                base_url=base_url,
                headers=headers,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = client.get(path, params={"symbol": symbol})

                if response.status_code == 404 and self.is_realtime:
                    options = client.get(
                        "/stock/get-options",
                        params={"symbol": symbol, "lang": "en-US", "region": "US"},
                    )
                    if options.is_success:
                        price = extract_price(options.json())
                        if price is not None:
                            return QuotePartial(price=price)
        except httpx.TimeoutException:
            logger.warning("RapidAPI timed out for %s", symbol)
            return QuotePartial.failure(f"RapidAPI timed out after {self._timeout:g}s")
        except httpx.HTTPError as exc:
            logger.warning("RapidAPI request failed for %s: %s", symbol, exc)
            return QuotePartial.failure(str(exc) or "RapidAPI request failed")
        except ValueError:
            return QuotePartial.failure("RapidAPI returned invalid JSON")

        if not response.is_success:
            return QuotePartial.failure(f"RapidAPI returned {response.status_code}")

        try:
            payload = response.json()
        except ValueError:
            return QuotePartial.failure("RapidAPI returned invalid JSON")

        price = extract_price(payload)
        if price is None:
            return QuotePartial.failure("Invalid or missing price in response")
        return QuotePartial(price=price)
