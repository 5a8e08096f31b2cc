"""Market data providers module."""

from stockfolio.providers.market_data_provider import QuoteProvider, SymbolSearchProvider
from stockfolio.providers.yahoo_provider import YahooFinanceProvider
from stockfolio.providers.google_finance_provider import GoogleFinanceProvider
from stockfolio.providers.rapidapi_provider import RapidApiProvider
from stockfolio.providers.stub_provider import StubQuoteProvider
from stockfolio.providers.registry import ProviderChain, build_provider_chain

__all__ = [
    "QuoteProvider",
    "SymbolSearchProvider",
    "YahooFinanceProvider",
    "GoogleFinanceProvider",
    "RapidApiProvider",
    "StubQuoteProvider",
    "ProviderChain",
    "build_provider_chain",
]
