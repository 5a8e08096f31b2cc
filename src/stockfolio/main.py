"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stockfolio.config.settings import get_settings
from stockfolio.config.logging_config import setup_logging
from stockfolio.repositories.sqlalchemy.database import init_db
from stockfolio.api.routers import market_router, portfolios_router, stocks_router
from stockfolio.core.exceptions import AppError

logger = logging.getLogger(__name__)

_STATUS_BY_CODE = {
    "VALIDATION_ERROR": 400,
    "NOT_FOUND": 404,
    "PROVIDER_ERROR": 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_db()
    logger.info("Stockfolio API started (market data: %s)", get_settings().market_data_mode)
    yield


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Equity holdings tracking with live valuation",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(market_router)
app.include_router(portfolios_router)
app.include_router(stocks_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Map application errors to {error, message} bodies; unknown codes are 400s."""
    status_code = _STATUS_BY_CODE.get(exc.code, 400)
    logger.info("%s %s -> %d %s", request.method, request.url.path, status_code, exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """API name, version and where the docs live."""
    current = get_settings()
    return {
        "app": current.app_name,
        "version": current.app_version,
        "market_data": current.market_data_mode,
        "docs": "/docs",
    }
