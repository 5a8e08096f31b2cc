"""SQLAlchemy implementations of PortfolioRepository and HoldingRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from stockfolio.core.timezone import to_utc
from stockfolio.domain.models import Holding, Portfolio
from stockfolio.repositories.sqlalchemy.orm_models import HoldingORM, PortfolioORM, StockORM


class SqlAlchemyPortfolioRepository:
    """SQLAlchemy-backed portfolio repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, portfolio: Portfolio) -> Portfolio:
        """Persist a new portfolio."""
        orm_portfolio = PortfolioORM(
            portfolio_id=portfolio.portfolio_id,
            user_id=portfolio.user_id,
            name=portfolio.name,
            created_at=portfolio.created_at,
        )
        self._db.add(orm_portfolio)
        self._db.commit()
        self._db.refresh(orm_portfolio)
        return self._to_domain(orm_portfolio)

    def get_by_id(self, portfolio_id: str) -> Optional[Portfolio]:
        """Retrieve portfolio by ID."""
        orm_portfolio = self._db.get(PortfolioORM, portfolio_id)
        return self._to_domain(orm_portfolio) if orm_portfolio else None

    def get_by_user(self, user_id: str) -> Optional[Portfolio]:
        """Retrieve the portfolio owned by a user."""
        orm_portfolio = (
            self._db.query(PortfolioORM)
            .filter(PortfolioORM.user_id == user_id)
            .first()
        )
        return self._to_domain(orm_portfolio) if orm_portfolio else None

    def update(self, portfolio: Portfolio) -> Portfolio:
        """Update portfolio display name."""
        orm_portfolio = self._db.get(PortfolioORM, portfolio.portfolio_id)
        if orm_portfolio is None:
            raise ValueError(f"Portfolio not found: {portfolio.portfolio_id}")
        orm_portfolio.name = portfolio.name
        self._db.commit()
        self._db.refresh(orm_portfolio)
        return self._to_domain(orm_portfolio)

    @staticmethod
    def _to_domain(orm: PortfolioORM) -> Portfolio:
        """Convert ORM model to domain model."""
        return Portfolio(
            portfolio_id=orm.portfolio_id,
            user_id=orm.user_id,
            name=orm.name,
            created_at=to_utc(orm.created_at) if orm.created_at else None,
        )


class SqlAlchemyHoldingRepository:
    """SQLAlchemy-backed holding repository."""

    def __init__(self, db: Session):
        self._db = db

    def get_by_id(self, holding_id: str) -> Optional[Holding]:
        """Retrieve holding by ID."""
        orm_holding = self._db.get(HoldingORM, holding_id)
        return self._to_domain(orm_holding) if orm_holding else None

    def find(self, portfolio_id: str, stock_id: str) -> Optional[Holding]:
        """Retrieve the holding for a (portfolio, stock) pair."""
        orm_holding = (
            self._db.query(HoldingORM)
            .filter(
                HoldingORM.portfolio_id == portfolio_id,
                HoldingORM.stock_id == stock_id,
            )
            .first()
        )
        return self._to_domain(orm_holding) if orm_holding else None

    def list_by_portfolio(self, portfolio_id: str) -> list[Holding]:
        """List all holdings of a portfolio, ordered by symbol."""
        orm_holdings = (
            self._db.query(HoldingORM)
            .join(StockORM, HoldingORM.stock_id == StockORM.stock_id)
            .filter(HoldingORM.portfolio_id == portfolio_id)
            .order_by(StockORM.symbol)
            .all()
        )
        return [self._to_domain(h) for h in orm_holdings]

    def list_symbols(self, portfolio_id: str) -> list[str]:
        """Symbols of all stocks held in a portfolio."""
        rows = (
            self._db.query(StockORM.symbol)
            .join(HoldingORM, HoldingORM.stock_id == StockORM.stock_id)
            .filter(HoldingORM.portfolio_id == portfolio_id)
            .order_by(StockORM.symbol)
            .all()
        )
        return [row[0] for row in rows]

    def create(self, holding: Holding) -> Holding:
        """Persist a new holding."""
        orm_holding = HoldingORM(
            holding_id=holding.holding_id,
            portfolio_id=holding.portfolio_id,
            stock_id=holding.stock_id,
            quantity=holding.quantity,
            purchase_price=holding.purchase_price,
        )
        self._db.add(orm_holding)
        self._db.commit()
        self._db.refresh(orm_holding)
        return self._to_domain(orm_holding)

    def update(self, holding: Holding) -> Holding:
        """Update quantity and purchase price."""
        orm_holding = self._db.get(HoldingORM, holding.holding_id)
        if orm_holding is None:
            raise ValueError(f"Holding not found: {holding.holding_id}")
        orm_holding.quantity = holding.quantity
        orm_holding.purchase_price = holding.purchase_price
        self._db.commit()
        self._db.refresh(orm_holding)
        return self._to_domain(orm_holding)

    def delete(self, holding_id: str) -> None:
        """Delete a holding."""
        self._db.query(HoldingORM).filter(HoldingORM.holding_id == holding_id).delete()
        self._db.commit()

    @staticmethod
    def _to_domain(orm: HoldingORM) -> Holding:
        """Convert ORM model to domain model."""
        return Holding(
            holding_id=orm.holding_id,
            portfolio_id=orm.portfolio_id,
            stock_id=orm.stock_id,
            quantity=Decimal(str(orm.quantity)),
            purchase_price=Decimal(str(orm.purchase_price)),
        )
