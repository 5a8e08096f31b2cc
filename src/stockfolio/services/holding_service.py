"""Holding and portfolio management, plus the joined portfolio view."""

import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from stockfolio.core.exceptions import NotFoundError, ValidationError
from stockfolio.core.symbols import normalize_symbol
from stockfolio.core.timezone import now_utc
from stockfolio.domain.models import Holding, Portfolio, QuoteCacheEntry, Stock, UNKNOWN_SECTOR
from stockfolio.domain.views import HoldingWithQuote, PortfolioView
from stockfolio.repositories.protocols import (
    HoldingRepository,
    PortfolioRepository,
    QuoteCacheRepository,
    StockRepository,
)
from stockfolio.services.valuation_engine import compute_portfolio_view

logger = logging.getLogger(__name__)


@dataclass
class HoldingCreate:
    """Input data for recording a purchase."""

    symbol: str
    quantity: Decimal
    purchase_price: Decimal
    name: Optional[str] = None
    sector: Optional[str] = None
    exchange: Optional[str] = None


@dataclass
class HoldingUpdate:
    """Partial update data for editing a holding."""

    quantity: Optional[Decimal] = None
    purchase_price: Optional[Decimal] = None


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


class HoldingService:
    """
    Service for portfolios, their holdings and the stock catalogue.

    Stocks are upserted by symbol on first purchase. A repeat purchase
    of a held stock merges into the existing holding at weighted-average
    cost, so a portfolio never holds two rows for one stock.
    """

    def __init__(
        self,
        stock_repo: StockRepository,
        portfolio_repo: PortfolioRepository,
        holding_repo: HoldingRepository,
        quote_cache_repo: QuoteCacheRepository,
        default_exchange: str = "NSE",
    ):
        self._stock_repo = stock_repo
        self._portfolio_repo = portfolio_repo
        self._holding_repo = holding_repo
        self._quote_cache_repo = quote_cache_repo
        self._default_exchange = default_exchange

    # Portfolios

    def create_portfolio(self, user_id: str, name: Optional[str] = None) -> Portfolio:
        """Create the single portfolio of a user."""
        user_id = (user_id or "").strip()
        if not user_id:
            raise ValidationError("user_id is required")
        if self._portfolio_repo.get_by_user(user_id):
            raise ValidationError(f"User '{user_id}' already has a portfolio")

        portfolio = Portfolio(
            portfolio_id=str(uuid.uuid4()),
            user_id=user_id,
            name=_clean(name) or f"{user_id}'s Portfolio",
            created_at=now_utc(),
        )
        return self._portfolio_repo.create(portfolio)

    def get_portfolio(self, portfolio_id: str) -> Portfolio:
        """Get portfolio by ID."""
        portfolio = self._portfolio_repo.get_by_id(portfolio_id)
        if not portfolio:
            raise NotFoundError("Portfolio", portfolio_id)
        return portfolio

    def get_portfolio_for_user(self, user_id: str) -> Portfolio:
        portfolio = self._portfolio_repo.get_by_user(user_id)
        if not portfolio:
            raise NotFoundError("Portfolio for user", user_id)
        return portfolio

    def rename_portfolio(self, portfolio_id: str, name: str) -> Portfolio:
        """Change the display name of a portfolio."""
        portfolio = self.get_portfolio(portfolio_id)
        clean_name = _clean(name)
        if not clean_name:
            raise ValidationError("name is required")
        portfolio.name = clean_name
        return self._portfolio_repo.update(portfolio)

    # Stocks

    def get_stock(self, symbol: str) -> Stock:
        """Look up a stock by symbol."""
        normalized = normalize_symbol(symbol)
        stock = self._stock_repo.find_by_symbol(normalized) if normalized else None
        if not stock:
            raise NotFoundError("Stock", normalized or "")
        return stock

    def list_stocks(self, search: Optional[str] = None, sector: Optional[str] = None) -> list[Stock]:
        return self._stock_repo.search(search=_clean(search), sector=_clean(sector))

    def cached_quotes(self, stocks: list[Stock]) -> dict[str, QuoteCacheEntry]:
        """Cache entries of the given stocks, keyed by stock ID; never-refreshed stocks are absent."""
        return self._quote_cache_repo.get_many([s.stock_id for s in stocks])

    def upsert_stock(
        self,
        symbol: str,
        name: Optional[str] = None,
        sector: Optional[str] = None,
        exchange: Optional[str] = None,
    ) -> Stock:
        """
        Return the stock for symbol, creating it if needed.

        An existing stock keeps its symbol; name and sector are only filled
        in where they still hold placeholders.
        """
        normalized = normalize_symbol(symbol)
        if not normalized:
            raise ValidationError("symbol is required")
        name, sector, exchange = _clean(name), _clean(sector), _clean(exchange)

        stock = self._stock_repo.find_by_symbol(normalized)
        if stock is None:
            return self._stock_repo.create(
                Stock(
                    stock_id=str(uuid.uuid4()),
                    symbol=normalized,
                    name=name or normalized,
                    sector=sector or UNKNOWN_SECTOR,
                    exchange=(exchange or self._default_exchange).upper(),
                )
            )

        changed = False
        if name and stock.has_placeholder_name():
            stock.name = name
            changed = True
        if sector and stock.has_placeholder_sector():
            stock.sector = sector
            changed = True
        return self._stock_repo.update(stock) if changed else stock

    # Holdings

    def add_holding(self, portfolio_id: str, data: HoldingCreate) -> Holding:
        """Record a purchase, merging into an existing holding of the same stock."""
        self._validate_quantity(data.quantity)
        self._validate_price(data.purchase_price)
        self.get_portfolio(portfolio_id)

        stock = self.upsert_stock(data.symbol, data.name, data.sector, data.exchange)
        existing = self._holding_repo.find(portfolio_id, stock.stock_id)

        if existing:
            existing.merge_purchase(data.quantity, data.purchase_price)
            logger.info(
                "Merged purchase of %s into holding %s (qty %s @ %s)",
                stock.symbol,
                existing.holding_id,
                existing.quantity,
                existing.purchase_price,
            )
            return self._holding_repo.update(existing)

        return self._holding_repo.create(
            Holding(
                holding_id=str(uuid.uuid4()),
                portfolio_id=portfolio_id,
                stock_id=stock.stock_id,
                quantity=data.quantity,
                purchase_price=data.purchase_price,
            )
        )

    def update_holding(self, portfolio_id: str, holding_id: str, data: HoldingUpdate) -> Holding:
        """Overwrite quantity and/or purchase price of a holding."""
        if data.quantity is None and data.purchase_price is None:
            raise ValidationError("Provide quantity and/or purchase_price to update")
        if data.quantity is not None:
            self._validate_quantity(data.quantity)
        if data.purchase_price is not None:
            self._validate_price(data.purchase_price)

        holding = self._get_owned_holding(portfolio_id, holding_id)
        if data.quantity is not None:
            holding.quantity = data.quantity
        if data.purchase_price is not None:
            holding.purchase_price = data.purchase_price
        return self._holding_repo.update(holding)

    def delete_holding(self, portfolio_id: str, holding_id: str) -> None:
        """Remove a holding from a portfolio."""
        self._get_owned_holding(portfolio_id, holding_id)
        self._holding_repo.delete(holding_id)

    def list_holdings(self, portfolio_id: str) -> list[HoldingWithQuote]:
        """Holdings joined with their stock and cached quote (if any)."""
        self.get_portfolio(portfolio_id)
        holdings = self._holding_repo.list_by_portfolio(portfolio_id)
        quotes = self._quote_cache_repo.get_many([h.stock_id for h in holdings])

        joined = []
        for holding in holdings:
            stock = self._stock_repo.get_by_id(holding.stock_id)
            if stock is None:
                logger.warning("Holding %s references missing stock %s", holding.holding_id, holding.stock_id)
                continue
            joined.append(HoldingWithQuote(holding=holding, stock=stock, quote=quotes.get(holding.stock_id)))
        return joined

    def get_portfolio_view(self, portfolio_id: str) -> PortfolioView:
        """Computed holdings, sector summary and totals for a portfolio."""
        return compute_portfolio_view(self.list_holdings(portfolio_id))

    def _get_owned_holding(self, portfolio_id: str, holding_id: str) -> Holding:
        holding = self._holding_repo.get_by_id(holding_id)
        if not holding or holding.portfolio_id != portfolio_id:
            raise NotFoundError("Holding", holding_id)
        return holding

    @staticmethod
    def _validate_quantity(quantity: Decimal) -> None:
        if quantity is None or quantity <= 0:
            raise ValidationError("quantity must be positive")

    @staticmethod
    def _validate_price(price: Decimal) -> None:
        if price is None or price < 0:
            raise ValidationError("purchase_price must be non-negative")
