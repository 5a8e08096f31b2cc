"""
Unit tests for MarketDataService.

Tests cover:
- Input validation before any provider call
- Portfolio refresh deriving symbols from holdings
- On-demand quotes
- Ticker search validation and delegation
"""

from decimal import Decimal

import pytest

from stockfolio.core.exceptions import ProviderError, ValidationError
from stockfolio.domain.views import RefreshResult, SymbolMatch
from stockfolio.services import HoldingCreate, HoldingService, MarketDataService

from tests.conftest import ScriptedProvider, price


class TestRefreshQuotes:
    """Tests for explicit symbol refreshes."""

    @pytest.mark.parametrize("symbols", [None, [], ["  ", ""]])
    def test_empty_input_rejected(
        self,
        market_data_service: MarketDataService,
        primary_provider: ScriptedProvider,
        symbols,
    ):
        """
        GIVEN no usable symbols
        WHEN I refresh
        THEN a ValidationError is raised and no provider is called
        """
        with pytest.raises(ValidationError):
            market_data_service.refresh_quotes(symbols)

        assert primary_provider.calls == []

    def test_delegates_to_resolver(
        self,
        market_data_service: MarketDataService,
        primary_provider: ScriptedProvider,
        stock_factory,
    ):
        stock_factory("AAPL")
        primary_provider.responses["AAPL"] = price("185.50")

        result = market_data_service.refresh_quotes(["aapl"])

        assert result.updated_count == 1


class TestRefreshPortfolio:
    """Tests for refreshing every holding of a portfolio."""

    def test_empty_portfolio_is_noop(
        self,
        market_data_service: MarketDataService,
        primary_provider: ScriptedProvider,
        sample_portfolio,
    ):
        result = market_data_service.refresh_portfolio(sample_portfolio.portfolio_id)

        assert result == RefreshResult()
        assert primary_provider.calls == []

    def test_refreshes_held_symbols(
        self,
        market_data_service: MarketDataService,
        holding_service: HoldingService,
        primary_provider: ScriptedProvider,
        sample_portfolio,
    ):
        """
        GIVEN a portfolio holding TCS and INFY
        WHEN I refresh the portfolio
        THEN both symbols are resolved with their exchange
        """
        pid = sample_portfolio.portfolio_id
        for symbol in ("TCS", "INFY"):
            holding_service.add_holding(
                pid, HoldingCreate(symbol=symbol, quantity=Decimal("1"), purchase_price=Decimal("100"))
            )
        primary_provider.responses["TCS"] = price("3920.10")

        result = market_data_service.refresh_portfolio(pid)

        assert sorted(primary_provider.calls) == [("INFY", "NSE"), ("TCS", "NSE")]
        assert result.updated_count == 1
        assert result.errors == ["INFY: primary: no data"]


class TestGetQuote:
    """Tests for on-demand quotes."""

    def test_blank_symbol_rejected(self, market_data_service: MarketDataService):
        with pytest.raises(ValidationError) as exc_info:
            market_data_service.get_quote(" ")

        assert exc_info.value.message == "Query parameter 'symbol' is required"

    def test_returns_resolved_quote(
        self,
        market_data_service: MarketDataService,
        primary_provider: ScriptedProvider,
    ):
        primary_provider.responses["MSFT"] = price("378.25", pe="35.6")

        quote = market_data_service.get_quote("msft")

        assert quote.cmp == Decimal("378.25")
        assert quote.pe_ratio == Decimal("35.6")


class RecordingSearch:
    """Symbol search double that records queries."""

    name = "recording"

    def __init__(self, matches=None):
        self.matches = matches or []
        self.calls = []

    def search_symbols(self, query, limit=10):
        self.calls.append((query, limit))
        return self.matches


class TestSearchSymbols:
    """Tests for upstream ticker search."""

    @pytest.mark.parametrize("query", [None, "", " ", "a", " b "])
    def test_short_query_rejected(self, resolver, holding_repo, query):
        """
        GIVEN a query shorter than two characters after trimming
        WHEN I search
        THEN a ValidationError is raised and the search source is not called
        """
        search = RecordingSearch()
        service = MarketDataService(resolver=resolver, holding_repo=holding_repo, symbol_search=search)

        with pytest.raises(ValidationError) as exc_info:
            service.search_symbols(query)

        assert exc_info.value.message == "Search query must be at least 2 characters"
        assert search.calls == []

    def test_delegates_trimmed_query_with_limit(self, resolver, holding_repo):
        match = SymbolMatch(symbol="AAPL", name="Apple Inc.", exchange="NMS", quote_type="EQUITY")
        search = RecordingSearch([match])
        service = MarketDataService(resolver=resolver, holding_repo=holding_repo, symbol_search=search)

        assert service.search_symbols("  apple ") == [match]
        assert search.calls == [("apple", 10)]

    def test_without_search_source(self, market_data_service: MarketDataService):
        with pytest.raises(ProviderError) as exc_info:
            market_data_service.search_symbols("apple")

        assert exc_info.value.code == "PROVIDER_ERROR"
