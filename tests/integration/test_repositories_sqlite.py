"""
Integration tests for the SQLAlchemy repositories on SQLite.

Tests cover:
- Stock uniqueness and search
- Quote cache: one row per stock, full replacement, timezone-aware timestamps
- Holding uniqueness per (portfolio, stock) and symbol listing
"""

import uuid
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from stockfolio.domain.models import Holding, Portfolio, QuoteCacheEntry, Stock
from stockfolio.repositories.sqlalchemy.orm_models import QuoteCacheORM

from tests.conftest import utc_datetime


@pytest.fixture
def portfolio(portfolio_repo) -> Portfolio:
    return portfolio_repo.create(
        Portfolio(portfolio_id="p-1", user_id="user-1", name="Main", created_at=utc_datetime(2024, 1, 2))
    )


def new_holding(portfolio_id: str, stock_id: str, quantity: str = "1", purchase_price: str = "100") -> Holding:
    return Holding(
        holding_id=str(uuid.uuid4()),
        portfolio_id=portfolio_id,
        stock_id=stock_id,
        quantity=Decimal(quantity),
        purchase_price=Decimal(purchase_price),
    )


class TestStockRepository:
    """Tests for SqlAlchemyStockRepository."""

    def test_symbol_is_unique(self, stock_repo, stock_factory):
        stock_factory("AAPL")

        with pytest.raises(IntegrityError):
            stock_repo.create(Stock(stock_id="other", symbol="AAPL", name="Dup"))

    def test_find_by_symbol(self, stock_repo, stock_factory):
        created = stock_factory("MSFT", name="Microsoft", sector="Technology")

        found = stock_repo.find_by_symbol("MSFT")

        assert found == created
        assert stock_repo.find_by_symbol("NOPE") is None

    def test_update(self, stock_repo, stock_factory):
        stock = stock_factory("TCS", sector="Unknown")
        stock.sector = "Technology"

        stock_repo.update(stock)

        assert stock_repo.get_by_id(stock.stock_id).sector == "Technology"


class TestQuoteCacheRepository:
    """Tests for SqlAlchemyQuoteCacheRepository."""

    def test_upsert_keeps_one_row_per_stock(self, quote_cache_repo, stock_factory, test_session):
        """
        GIVEN a stock refreshed twice
        WHEN both entries are upserted
        THEN one row remains holding the second entry in full
        """
        stock = stock_factory("AAPL")
        quote_cache_repo.upsert(QuoteCacheEntry(
            stock_id=stock.stock_id,
            cmp=Decimal("185.5"),
            pe_ratio=Decimal("29.1"),
            latest_earning=date(2024, 8, 1),
        ))
        quote_cache_repo.upsert(QuoteCacheEntry(
            stock_id=stock.stock_id,
            cmp=Decimal("0"),
            last_error="timed out",
        ))

        assert test_session.query(QuoteCacheORM).count() == 1
        entry = quote_cache_repo.get(stock.stock_id)
        assert entry.cmp == Decimal("0")
        assert entry.pe_ratio is None
        assert entry.latest_earning is None
        assert entry.last_error == "timed out"

    def test_updated_at_is_utc(self, quote_cache_repo, stock_factory):
        stock = stock_factory("AAPL")

        entry = quote_cache_repo.upsert(QuoteCacheEntry(
            stock_id=stock.stock_id,
            cmp=Decimal("1"),
            updated_at=utc_datetime(2024, 6, 14, 16, 0),
        ))

        assert entry.updated_at == utc_datetime(2024, 6, 14, 16, 0)
        assert entry.updated_at.utcoffset().total_seconds() == 0

    def test_get_many(self, quote_cache_repo, stock_factory):
        a = stock_factory("AAA")
        b = stock_factory("BBB")
        quote_cache_repo.upsert(QuoteCacheEntry(stock_id=a.stock_id, cmp=Decimal("10")))

        entries = quote_cache_repo.get_many([a.stock_id, b.stock_id])

        assert list(entries) == [a.stock_id]
        assert quote_cache_repo.get_many([]) == {}

    def test_rejected_upsert_rolls_back(self, quote_cache_repo, stock_factory):
        """
        GIVEN an upsert for a stock ID with no stock row
        WHEN the foreign key rejects it
        THEN the error propagates and the next upsert on the session succeeds
        """
        stock = stock_factory("AAPL")

        with pytest.raises(IntegrityError):
            quote_cache_repo.upsert(QuoteCacheEntry(stock_id="no-such-stock", cmp=Decimal("1")))

        entry = quote_cache_repo.upsert(QuoteCacheEntry(stock_id=stock.stock_id, cmp=Decimal("185.5")))

        assert entry.cmp == Decimal("185.5")
        assert quote_cache_repo.get("no-such-stock") is None


class TestHoldingRepository:
    """Tests for SqlAlchemyHoldingRepository."""

    def test_one_holding_per_stock_per_portfolio(self, holding_repo, stock_factory, portfolio):
        stock = stock_factory("AAPL")
        holding_repo.create(new_holding(portfolio.portfolio_id, stock.stock_id))

        with pytest.raises(IntegrityError):
            holding_repo.create(new_holding(portfolio.portfolio_id, stock.stock_id))

    def test_list_symbols_sorted(self, holding_repo, stock_factory, portfolio):
        for symbol in ("TCS", "AAPL", "INFY"):
            stock = stock_factory(symbol)
            holding_repo.create(new_holding(portfolio.portfolio_id, stock.stock_id))

        assert holding_repo.list_symbols(portfolio.portfolio_id) == ["AAPL", "INFY", "TCS"]
        assert holding_repo.list_symbols("other") == []

    def test_decimal_round_trip(self, holding_repo, stock_factory, portfolio):
        stock = stock_factory("AAPL")
        created = holding_repo.create(
            new_holding(portfolio.portfolio_id, stock.stock_id, quantity="2.5", purchase_price="123.45678901")
        )

        found = holding_repo.find(portfolio.portfolio_id, stock.stock_id)

        assert found.holding_id == created.holding_id
        assert found.quantity == Decimal("2.5")
        assert found.purchase_price == Decimal("123.45678901")
