"""Application context for in-process service management.

Provides access to the services without HTTP. Used by scripts such as
the periodic quote refresh.
"""

from pathlib import Path
from typing import Optional

from stockfolio.config.settings import set_settings, get_settings
from stockfolio.providers.registry import ProviderChain, build_provider_chain
from stockfolio.repositories.sqlalchemy.database import (
    init_db_with_path,
    get_session,
)
from stockfolio.repositories.sqlalchemy import (
    SqlAlchemyStockRepository,
    SqlAlchemyPortfolioRepository,
    SqlAlchemyHoldingRepository,
    SqlAlchemyQuoteCacheRepository,
)
from stockfolio.services import (
    HoldingService,
    MarketDataService,
    QuoteResolver,
    RateLimiter,
    ThrottlePolicy,
)


class AppContext:
    """
    In-process access to all services over one database session.

    Services are created lazily and dropped on initialize().
    """

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        provider_chain: Optional[ProviderChain] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        self._data_dir = data_dir
        self._provider_chain = provider_chain
        self._rate_limiter = rate_limiter
        self._session = None

        self._holding_service: Optional[HoldingService] = None
        self._market_data_service: Optional[MarketDataService] = None

    def initialize(self, data_dir: Optional[Path] = None) -> None:
        """Initialize or reinitialize the application with a data directory."""
        if data_dir:
            self._data_dir = data_dir

        current = get_settings()
        settings = current.model_copy(update={"data_dir": self._data_dir, "database_url": None})
        set_settings(settings)

        init_db_with_path(settings.get_data_dir() / "stockfolio.db")

        self.close()
        self._holding_service = None
        self._market_data_service = None

    @property
    def data_dir(self) -> Path:
        return get_settings().get_data_dir()

    def _get_session(self):
        if self._session is None:
            self._session = get_session()
        return self._session

    def _chain(self) -> ProviderChain:
        if self._provider_chain is None:
            settings = get_settings()
            self._provider_chain = build_provider_chain(settings.provider_config(), settings.market_data_mode)
        return self._provider_chain

    def _limiter(self) -> RateLimiter:
        if self._rate_limiter is None:
            self._rate_limiter = RateLimiter(get_settings().provider_min_interval_seconds)
        return self._rate_limiter

    @property
    def holdings(self) -> HoldingService:
        """Get the HoldingService instance."""
        if self._holding_service is None:
            session = self._get_session()
            self._holding_service = HoldingService(
                stock_repo=SqlAlchemyStockRepository(session),
                portfolio_repo=SqlAlchemyPortfolioRepository(session),
                holding_repo=SqlAlchemyHoldingRepository(session),
                quote_cache_repo=SqlAlchemyQuoteCacheRepository(session),
                default_exchange=get_settings().default_exchange,
            )
        return self._holding_service

    @property
    def market_data(self) -> MarketDataService:
        """Get the MarketDataService instance."""
        if self._market_data_service is None:
            session = self._get_session()
            settings = get_settings()
            chain = self._chain()
            resolver = QuoteResolver(
                stock_repo=SqlAlchemyStockRepository(session),
                quote_cache_repo=SqlAlchemyQuoteCacheRepository(session),
                price_providers=chain.price_providers,
                fundamentals_providers=chain.fundamentals_providers,
                rate_limiter=self._limiter(),
                throttle=ThrottlePolicy(
                    symbol_delay_seconds=settings.symbol_delay_seconds,
                    not_found_delay_seconds=settings.not_found_delay_seconds,
                ),
            )
            self._market_data_service = MarketDataService(
                resolver=resolver,
                holding_repo=SqlAlchemyHoldingRepository(session),
                symbol_search=chain.symbol_search,
            )
        return self._market_data_service

    def close(self) -> None:
        """Clean up resources."""
        if self._session:
            self._session.close()
            self._session = None
