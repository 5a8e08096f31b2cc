"""
Engine and session management.

The process holds one engine at a time; configure() swaps it when the
database location changes. SQLite connections enforce foreign keys, so
holdings and cache rows cannot reference a stock that does not exist.
"""

from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, event, Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from stockfolio.config.settings import get_settings

Base = declarative_base()

_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, **engine_kwargs) -> Engine:
    """Create an engine; SQLite gets cross-thread access and FK enforcement."""
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
    engine = create_engine(database_url, echo=False, **engine_kwargs)
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def configure(database_url: str) -> Engine:
    """Point sessions at database_url, disposing of any previous engine."""
    global _engine, _SessionLocal

    reset_database()
    _engine = build_engine(database_url)
    _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
    return _engine


def get_engine() -> Engine:
    """Current engine, configured from settings on first use."""
    if _engine is None:
        return configure(get_settings().get_database_url())
    return _engine


def get_session() -> Session:
    """New session on the current engine; the caller closes it."""
    if _SessionLocal is None:
        get_engine()
    return _SessionLocal()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request."""
    db = get_session()
    try:
        yield db
    finally:
        db.close()


def create_tables(engine: Optional[Engine] = None) -> None:
    # ORM models register themselves on Base when imported
    from stockfolio.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())


def init_db() -> None:
    """Create tables in the database named by settings."""
    create_tables(get_engine())


def init_db_with_path(db_path: Path) -> None:
    """Switch to the SQLite file at db_path and create its tables."""
    create_tables(configure(f"sqlite:///{db_path}"))


def reset_database() -> None:
    """Dispose of the engine so the next use reconfigures from settings."""
    global _engine, _SessionLocal

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None
