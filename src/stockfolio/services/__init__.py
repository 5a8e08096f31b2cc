"""Service layer - business logic orchestration."""

from stockfolio.services.rate_limiter import RateLimiter
from stockfolio.services.quote_resolver import QuoteResolver, ThrottlePolicy
from stockfolio.services.valuation_engine import compute_portfolio_view
from stockfolio.services.holding_service import HoldingService, HoldingCreate, HoldingUpdate
from stockfolio.services.market_data_service import MarketDataService

__all__ = [
    "RateLimiter",
    "QuoteResolver",
    "ThrottlePolicy",
    "compute_portfolio_view",
    "HoldingService",
    "HoldingCreate",
    "HoldingUpdate",
    "MarketDataService",
]
