"""
Pytest configuration and fixtures for the stockfolio tests.

This module provides:
- Test settings (stub market data, in-memory database, no throttling delays)
- In-memory SQLite database fixtures
- Scripted quote providers and a fake clock for the rate limiter
- Service and repository fixtures
- Factory helpers for stocks, portfolios and valuation inputs
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional, Union

import pytest
from sqlalchemy import StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from stockfolio.config.settings import Settings, set_settings, reset_settings
from stockfolio.main import app
from stockfolio.api.deps import get_provider_chain, get_rate_limiter
from stockfolio.repositories.sqlalchemy.database import (
    Base,
    build_engine,
    create_tables,
    get_db,
    reset_database,
)
from stockfolio.repositories.sqlalchemy import (
    SqlAlchemyStockRepository,
    SqlAlchemyPortfolioRepository,
    SqlAlchemyHoldingRepository,
    SqlAlchemyQuoteCacheRepository,
)
from stockfolio.providers.registry import ProviderChain, build_stub_chain
from stockfolio.services import (
    HoldingService,
    MarketDataService,
    QuoteResolver,
    RateLimiter,
    ThrottlePolicy,
)
from stockfolio.domain.models import Holding, Portfolio, QuoteCacheEntry, Stock
from stockfolio.domain.views import HoldingWithQuote, QuotePartial
from stockfolio.core.timezone import UTC


# =============================================================================
# SETTINGS
# =============================================================================


def make_test_settings(**overrides) -> Settings:
    """Settings isolated from the environment and any .env file."""
    values = dict(
        database_url="sqlite://",
        market_data_mode="stub",
        rapidapi_key=None,
        provider_min_interval_seconds=0.0,
        symbol_delay_seconds=0.0,
        not_found_delay_seconds=0.0,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(autouse=True)
def test_settings():
    """Install test settings for every test and restore afterwards."""
    settings = make_test_settings()
    set_settings(settings)
    yield settings
    reset_settings()
    reset_database()


# =============================================================================
# TIME HELPERS
# =============================================================================


def utc_datetime(year: int, month: int, day: int, hour: int = 10, minute: int = 0) -> datetime:
    """Create a localized datetime in UTC."""
    return UTC.localize(datetime(year, month, day, hour, minute))


class FakeClock:
    """Monotonic clock whose sleep() just advances time and records the call."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: list[float] = []

    def clock(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rate_limiter(fake_clock) -> RateLimiter:
    """Limiter with the production interval, running on the fake clock."""
    return RateLimiter(min_interval_seconds=0.4, clock=fake_clock.clock, sleep=fake_clock.sleep)


def no_wait_limiter() -> RateLimiter:
    return RateLimiter(min_interval_seconds=0.0, sleep=lambda _seconds: None)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    engine = build_engine("sqlite:///:memory:", poolclass=StaticPool)
    create_tables(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def stock_repo(test_session) -> SqlAlchemyStockRepository:
    return SqlAlchemyStockRepository(test_session)


@pytest.fixture
def portfolio_repo(test_session) -> SqlAlchemyPortfolioRepository:
    return SqlAlchemyPortfolioRepository(test_session)


@pytest.fixture
def holding_repo(test_session) -> SqlAlchemyHoldingRepository:
    return SqlAlchemyHoldingRepository(test_session)


@pytest.fixture
def quote_cache_repo(test_session) -> SqlAlchemyQuoteCacheRepository:
    return SqlAlchemyQuoteCacheRepository(test_session)


# =============================================================================
# PROVIDER FIXTURES
# =============================================================================


class ScriptedProvider:
    """
    Quote provider returning scripted partials per symbol.

    A scripted Exception is raised instead of returned. Every call is
    recorded as (symbol, exchange_hint).
    """

    def __init__(
        self,
        name: str,
        responses: Optional[dict[str, Union[QuotePartial, Exception]]] = None,
        default: Optional[QuotePartial] = None,
    ):
        self.name = name
        self.responses = dict(responses or {})
        self.default = default or QuotePartial.failure(f"{name}: no data")
        self.calls: list[tuple[str, Optional[str]]] = []

    def resolve_quote(self, symbol: str, exchange_hint: Optional[str] = None) -> QuotePartial:
        self.calls.append((symbol, exchange_hint))
        response = self.responses.get(symbol, self.default)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def symbols_called(self) -> list[str]:
        return [symbol for symbol, _ in self.calls]


def price(value: str, pe: Optional[str] = None, earnings: Optional[date] = None) -> QuotePartial:
    """Shorthand for a successful partial."""
    return QuotePartial(
        price=Decimal(value),
        pe_ratio=Decimal(pe) if pe is not None else None,
        earnings_date=earnings,
    )


def fundamentals(pe: Optional[str] = None, earnings: Optional[date] = None) -> QuotePartial:
    """Shorthand for a price-less partial carrying fundamentals."""
    return QuotePartial(pe_ratio=Decimal(pe) if pe is not None else None, earnings_date=earnings)


@pytest.fixture
def primary_provider() -> ScriptedProvider:
    return ScriptedProvider("primary")


@pytest.fixture
def fundamentals_provider() -> ScriptedProvider:
    return ScriptedProvider("fundamentals", default=QuotePartial())


@pytest.fixture
def backup_provider() -> ScriptedProvider:
    return ScriptedProvider("backup")


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def throttle() -> ThrottlePolicy:
    return ThrottlePolicy(symbol_delay_seconds=0.3, not_found_delay_seconds=0.1)


@pytest.fixture
def resolver(
    stock_repo,
    quote_cache_repo,
    primary_provider,
    fundamentals_provider,
    backup_provider,
    rate_limiter,
    throttle,
) -> QuoteResolver:
    """Resolver over scripted providers: primary, backup, plus one fundamentals source."""
    return QuoteResolver(
        stock_repo=stock_repo,
        quote_cache_repo=quote_cache_repo,
        price_providers=[primary_provider, backup_provider],
        fundamentals_providers=[fundamentals_provider],
        rate_limiter=rate_limiter,
        throttle=throttle,
    )


@pytest.fixture
def holding_service(stock_repo, portfolio_repo, holding_repo, quote_cache_repo) -> HoldingService:
    return HoldingService(
        stock_repo=stock_repo,
        portfolio_repo=portfolio_repo,
        holding_repo=holding_repo,
        quote_cache_repo=quote_cache_repo,
    )


@pytest.fixture
def market_data_service(resolver, holding_repo) -> MarketDataService:
    return MarketDataService(resolver=resolver, holding_repo=holding_repo)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def stock_factory(stock_repo) -> Callable[..., Stock]:
    """Factory for persisted stocks."""

    def _create_stock(
        symbol: str,
        name: Optional[str] = None,
        sector: str = "Technology",
        exchange: str = "NASDAQ",
    ) -> Stock:
        return stock_repo.create(
            Stock(
                stock_id=str(uuid.uuid4()),
                symbol=symbol,
                name=name or symbol,
                sector=sector,
                exchange=exchange,
            )
        )

    return _create_stock


@pytest.fixture
def sample_portfolio(holding_service) -> Portfolio:
    return holding_service.create_portfolio("user-1", "Main")


# =============================================================================
# VALUATION INPUT HELPERS
# =============================================================================


def make_item(
    symbol: str,
    quantity: str,
    purchase_price: str,
    cmp: Optional[str] = None,
    sector: str = "Technology",
    pe_ratio: Optional[str] = None,
    last_error: Optional[str] = None,
) -> HoldingWithQuote:
    """Build a valuation input; cmp=None means the stock has no cache entry."""
    stock_id = f"stock-{symbol}"
    quote = None
    if cmp is not None:
        quote = QuoteCacheEntry(
            stock_id=stock_id,
            cmp=Decimal(cmp),
            pe_ratio=Decimal(pe_ratio) if pe_ratio is not None else None,
            last_error=last_error,
            updated_at=utc_datetime(2024, 6, 14, 16, 0),
        )
    return HoldingWithQuote(
        holding=Holding(
            holding_id=f"holding-{symbol}",
            portfolio_id="portfolio-1",
            stock_id=stock_id,
            quantity=Decimal(quantity),
            purchase_price=Decimal(purchase_price),
        ),
        stock=Stock(stock_id=stock_id, symbol=symbol, name=symbol, sector=sector, exchange="NSE"),
        quote=quote,
    )


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def stub_chain() -> ProviderChain:
    return build_stub_chain()


@pytest.fixture
def client(test_engine, stub_chain) -> TestClient:
    """Provide FastAPI test client with test database and offline providers."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_provider_chain] = lambda: stub_chain
    app.dependency_overrides[get_rate_limiter] = no_wait_limiter
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
