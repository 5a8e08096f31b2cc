"""Dependency injection for FastAPI."""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from stockfolio.config.settings import get_settings
from stockfolio.providers.registry import ProviderChain, build_provider_chain
from stockfolio.repositories.sqlalchemy.database import get_db
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


def get_stock_repo(db: Session = Depends(get_db)) -> SqlAlchemyStockRepository:
    """Provide StockRepository instance."""
    return SqlAlchemyStockRepository(db)


def get_portfolio_repo(db: Session = Depends(get_db)) -> SqlAlchemyPortfolioRepository:
    """Provide PortfolioRepository instance."""
    return SqlAlchemyPortfolioRepository(db)


def get_holding_repo(db: Session = Depends(get_db)) -> SqlAlchemyHoldingRepository:
    """Provide HoldingRepository instance."""
    return SqlAlchemyHoldingRepository(db)


def get_quote_cache_repo(db: Session = Depends(get_db)) -> SqlAlchemyQuoteCacheRepository:
    """Provide QuoteCacheRepository instance."""
    return SqlAlchemyQuoteCacheRepository(db)


def get_provider_chain() -> ProviderChain:
    """Provide the provider chain for the configured market data mode."""
    settings = get_settings()
    return build_provider_chain(settings.provider_config(), settings.market_data_mode)


@lru_cache(maxsize=1)
def get_rate_limiter() -> RateLimiter:
    """Process-wide limiter so the per-provider interval holds across requests."""
    return RateLimiter(min_interval_seconds=get_settings().provider_min_interval_seconds)


def get_quote_resolver(
    stock_repo: SqlAlchemyStockRepository = Depends(get_stock_repo),
    quote_cache_repo: SqlAlchemyQuoteCacheRepository = Depends(get_quote_cache_repo),
    chain: ProviderChain = Depends(get_provider_chain),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
) -> QuoteResolver:
    """Provide QuoteResolver instance."""
    settings = get_settings()
    return QuoteResolver(
        stock_repo=stock_repo,
        quote_cache_repo=quote_cache_repo,
        price_providers=chain.price_providers,
        fundamentals_providers=chain.fundamentals_providers,
        rate_limiter=rate_limiter,
        throttle=ThrottlePolicy(
            symbol_delay_seconds=settings.symbol_delay_seconds,
            not_found_delay_seconds=settings.not_found_delay_seconds,
        ),
    )


def get_market_data_service(
    resolver: QuoteResolver = Depends(get_quote_resolver),
    holding_repo: SqlAlchemyHoldingRepository = Depends(get_holding_repo),
    chain: ProviderChain = Depends(get_provider_chain),
) -> MarketDataService:
    """Provide MarketDataService instance."""
    return MarketDataService(resolver=resolver, holding_repo=holding_repo, symbol_search=chain.symbol_search)


def get_holding_service(
    stock_repo: SqlAlchemyStockRepository = Depends(get_stock_repo),
    portfolio_repo: SqlAlchemyPortfolioRepository = Depends(get_portfolio_repo),
    holding_repo: SqlAlchemyHoldingRepository = Depends(get_holding_repo),
    quote_cache_repo: SqlAlchemyQuoteCacheRepository = Depends(get_quote_cache_repo),
) -> HoldingService:
    """Provide HoldingService instance."""
    return HoldingService(
        stock_repo=stock_repo,
        portfolio_repo=portfolio_repo,
        holding_repo=holding_repo,
        quote_cache_repo=quote_cache_repo,
        default_exchange=get_settings().default_exchange,
    )
