"""API routers package."""

from stockfolio.api.routers.market import router as market_router
from stockfolio.api.routers.portfolios import router as portfolios_router
from stockfolio.api.routers.stocks import router as stocks_router

__all__ = [
    "market_router",
    "portfolios_router",
    "stocks_router",
]
