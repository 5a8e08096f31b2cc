"""SQLAlchemy repository implementations."""

from stockfolio.repositories.sqlalchemy.database import (
    build_engine,
    configure,
    create_tables,
    get_engine,
    get_db,
    get_session,
    init_db,
    init_db_with_path,
    reset_database,
    Base,
)
from stockfolio.repositories.sqlalchemy.stock_repo import SqlAlchemyStockRepository
from stockfolio.repositories.sqlalchemy.portfolio_repo import (
    SqlAlchemyPortfolioRepository,
    SqlAlchemyHoldingRepository,
)
from stockfolio.repositories.sqlalchemy.quote_cache_repo import SqlAlchemyQuoteCacheRepository

__all__ = [
    "build_engine",
    "configure",
    "create_tables",
    "get_engine",
    "get_db",
    "get_session",
    "init_db",
    "init_db_with_path",
    "reset_database",
    "Base",
    "SqlAlchemyStockRepository",
    "SqlAlchemyPortfolioRepository",
    "SqlAlchemyHoldingRepository",
    "SqlAlchemyQuoteCacheRepository",
]
