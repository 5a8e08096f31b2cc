"""Builds the ordered provider chains from configuration."""

from dataclasses import dataclass, field
from typing import Optional

from stockfolio.config.settings import ProviderConfig
from stockfolio.providers.google_finance_provider import GoogleFinanceProvider, DEFAULT_BASE_URL
from stockfolio.providers.market_data_provider import QuoteProvider, SymbolSearchProvider
from stockfolio.providers.rapidapi_provider import RapidApiProvider, DEFAULT_HOST
from stockfolio.providers.stub_provider import StubQuoteProvider
from stockfolio.providers.yahoo_provider import YahooFinanceProvider


@dataclass
class ProviderChain:
    """
    Providers in priority order.

    price_providers[0] is authoritative for price; the rest are backups
    consulted in order. Fundamentals providers override the primary's
    P/E ratio and earnings date. symbol_search backs ticker lookup.
    """

    price_providers: list[QuoteProvider] = field(default_factory=list)
    fundamentals_providers: list[QuoteProvider] = field(default_factory=list)
    symbol_search: Optional[SymbolSearchProvider] = None


def build_live_chain(config: ProviderConfig) -> ProviderChain:
    """Yahoo first (and for ticker search), RapidAPI as backup, Google Finance for fundamentals."""
    timeout = config.timeout_seconds
    yahoo = YahooFinanceProvider(fetch_timeout_seconds=timeout)
    return ProviderChain(
        price_providers=[
            yahoo,
            RapidApiProvider(
                api_key=config.credential("rapidapi"),
                host=config.endpoint("rapidapi", DEFAULT_HOST),
                timeout_seconds=timeout,
            ),
        ],
        fundamentals_providers=[
            GoogleFinanceProvider(
                base_url=config.endpoint("google_finance", DEFAULT_BASE_URL),
                timeout_seconds=timeout,
            ),
        ],
        symbol_search=yahoo,
    )


def build_stub_chain() -> ProviderChain:
    stub = StubQuoteProvider()
    return ProviderChain(price_providers=[stub], symbol_search=stub)


def build_provider_chain(config: ProviderConfig, mode: str = "live") -> ProviderChain:
    """Provider chain for the configured market data mode ("live" or "stub")."""
    if (mode or "").strip().lower() == "stub":
        return build_stub_chain()
    return build_live_chain(config)
