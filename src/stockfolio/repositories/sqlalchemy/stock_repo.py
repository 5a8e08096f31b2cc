"""SQLAlchemy implementation of StockRepository."""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from stockfolio.domain.models import Stock
from stockfolio.repositories.sqlalchemy.orm_models import StockORM


class SqlAlchemyStockRepository:
    """SQLAlchemy-backed stock catalogue."""

    def __init__(self, db: Session):
        self._db = db

    def get_by_id(self, stock_id: str) -> Optional[Stock]:
        """Retrieve stock by ID."""
        orm_stock = self._db.get(StockORM, stock_id)
        return self._to_domain(orm_stock) if orm_stock else None

    def find_by_symbol(self, symbol: str) -> Optional[Stock]:
        """Retrieve stock by normalized symbol."""
        orm_stock = self._db.query(StockORM).filter(StockORM.symbol == symbol).first()
        return self._to_domain(orm_stock) if orm_stock else None

    def create(self, stock: Stock) -> Stock:
        """Persist a new stock."""
        orm_stock = StockORM(
            stock_id=stock.stock_id,
            symbol=stock.symbol,
            name=stock.name,
            sector=stock.sector,
            exchange=stock.exchange,
        )
        self._db.add(orm_stock)
        self._db.commit()
        self._db.refresh(orm_stock)
        return self._to_domain(orm_stock)

    def update(self, stock: Stock) -> Stock:
        """Update name, sector and exchange; the symbol is immutable."""
        orm_stock = self._db.get(StockORM, stock.stock_id)
        if orm_stock is None:
            raise ValueError(f"Stock not found: {stock.stock_id}")
        orm_stock.name = stock.name
        orm_stock.sector = stock.sector
        orm_stock.exchange = stock.exchange
        self._db.commit()
        self._db.refresh(orm_stock)
        return self._to_domain(orm_stock)

    def search(self, search: Optional[str] = None, sector: Optional[str] = None) -> list[Stock]:
        """List stocks by symbol, optionally filtered (case-insensitive substring)."""
        query = self._db.query(StockORM)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(StockORM.symbol.ilike(pattern), StockORM.name.ilike(pattern)))
        if sector:
            query = query.filter(StockORM.sector.ilike(f"%{sector}%"))
        return [self._to_domain(s) for s in query.order_by(StockORM.symbol).all()]

    @staticmethod
    def _to_domain(orm: StockORM) -> Stock:
        """Convert ORM model to domain model."""
        return Stock(
            stock_id=orm.stock_id,
            symbol=orm.symbol,
            name=orm.name,
            sector=orm.sector,
            exchange=orm.exchange,
        )
