"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    Column,
    String,
    Date,
    DateTime,
    Text,
    ForeignKey,
    Numeric,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from stockfolio.core.timezone import now_utc
from stockfolio.repositories.sqlalchemy.database import Base


class StockORM(Base):
    """SQLAlchemy model for Stock."""

    __tablename__ = "stocks"

    stock_id = Column(String(36), primary_key=True)
    symbol = Column(String(32), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    sector = Column(String(255), nullable=False, default="Unknown")
    exchange = Column(String(32), nullable=False, default="NSE")

    quote_cache = relationship("QuoteCacheORM", back_populates="stock", uselist=False)


class QuoteCacheORM(Base):
    """SQLAlchemy model for QuoteCacheEntry (one row per stock)."""

    __tablename__ = "quote_cache"

    stock_id = Column(String(36), ForeignKey("stocks.stock_id"), primary_key=True)
    cmp = Column(Numeric(precision=18, scale=4), nullable=False, default=Decimal("0"))
    pe_ratio = Column(Numeric(precision=18, scale=4), nullable=True)
    latest_earning = Column(Date, nullable=True)
    last_error = Column(Text, nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=now_utc)

    stock = relationship("StockORM", back_populates="quote_cache")


class PortfolioORM(Base):
    """SQLAlchemy model for Portfolio."""

    __tablename__ = "portfolios"

    portfolio_id = Column(String(36), primary_key=True)
    user_id = Column(String(64), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_utc)

    holdings = relationship("HoldingORM", back_populates="portfolio", cascade="all, delete-orphan")


class HoldingORM(Base):
    """SQLAlchemy model for Holding."""

    __tablename__ = "holdings"
    __table_args__ = (
        UniqueConstraint("portfolio_id", "stock_id", name="uq_holding_portfolio_stock"),
    )

    holding_id = Column(String(36), primary_key=True)
    portfolio_id = Column(String(36), ForeignKey("portfolios.portfolio_id"), nullable=False)
    stock_id = Column(String(36), ForeignKey("stocks.stock_id"), nullable=False)
    quantity = Column(Numeric(precision=18, scale=8), nullable=False)
    purchase_price = Column(Numeric(precision=18, scale=8), nullable=False)

    portfolio = relationship("PortfolioORM", back_populates="holdings")
    stock = relationship("StockORM")
