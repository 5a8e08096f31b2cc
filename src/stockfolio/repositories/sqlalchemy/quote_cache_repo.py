"""SQLAlchemy implementation of QuoteCacheRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockfolio.core.timezone import now_utc, to_utc
from stockfolio.domain.models import QuoteCacheEntry
from stockfolio.repositories.sqlalchemy.orm_models import QuoteCacheORM


class SqlAlchemyQuoteCacheRepository:
    """SQLAlchemy-backed quote cache: exactly one row per stock."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, stock_id: str) -> Optional[QuoteCacheEntry]:
        """Get the cache entry for a stock."""
        orm_entry = self._db.get(QuoteCacheORM, stock_id)
        return self._to_domain(orm_entry) if orm_entry else None

    def get_many(self, stock_ids: list[str]) -> dict[str, QuoteCacheEntry]:
        """Get cache entries for several stocks, keyed by stock ID."""
        if not stock_ids:
            return {}
        orm_entries = (
            self._db.query(QuoteCacheORM)
            .filter(QuoteCacheORM.stock_id.in_(stock_ids))
            .all()
        )
        return {e.stock_id: self._to_domain(e) for e in orm_entries}

    def upsert(self, entry: QuoteCacheEntry) -> QuoteCacheEntry:
        """Create or fully replace the entry; every field is overwritten."""
        updated_at = entry.updated_at or now_utc()
        orm_entry = self._db.get(QuoteCacheORM, entry.stock_id)

        if orm_entry:
            orm_entry.cmp = entry.cmp
            orm_entry.pe_ratio = entry.pe_ratio
            orm_entry.latest_earning = entry.latest_earning
            orm_entry.last_error = entry.last_error
            orm_entry.updated_at = updated_at
        else:
            orm_entry = QuoteCacheORM(
                stock_id=entry.stock_id,
                cmp=entry.cmp,
                pe_ratio=entry.pe_ratio,
                latest_earning=entry.latest_earning,
                last_error=entry.last_error,
                updated_at=updated_at,
            )
            self._db.add(orm_entry)

        try:
            self._db.commit()
        except SQLAlchemyError:
            # Keep the session usable for later writes
            self._db.rollback()
            raise
        self._db.refresh(orm_entry)
        return self._to_domain(orm_entry)

    @staticmethod
    def _to_domain(orm: QuoteCacheORM) -> QuoteCacheEntry:
        """Convert ORM model to domain model."""
        return QuoteCacheEntry(
            stock_id=orm.stock_id,
            cmp=Decimal(str(orm.cmp)) if orm.cmp is not None else Decimal("0"),
            pe_ratio=Decimal(str(orm.pe_ratio)) if orm.pe_ratio is not None else None,
            latest_earning=orm.latest_earning,
            last_error=orm.last_error,
            updated_at=to_utc(orm.updated_at) if orm.updated_at else None,
        )
