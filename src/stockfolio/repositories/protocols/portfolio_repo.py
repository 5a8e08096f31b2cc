"""Portfolio and holding repository protocols."""

from typing import Protocol, Optional

from stockfolio.domain.models import Holding, Portfolio


class PortfolioRepository(Protocol):
    """Interface for portfolio data access."""

    def create(self, portfolio: Portfolio) -> Portfolio:
        """Persist a new portfolio."""
        ...

    def get_by_id(self, portfolio_id: str) -> Optional[Portfolio]:
        """Retrieve portfolio by ID."""
        ...

    def get_by_user(self, user_id: str) -> Optional[Portfolio]:
        """Retrieve the portfolio owned by a user."""
        ...

    def update(self, portfolio: Portfolio) -> Portfolio:
        """Update portfolio display name."""
        ...


class HoldingRepository(Protocol):
    """Interface for holding data access."""

    def get_by_id(self, holding_id: str) -> Optional[Holding]:
        """Retrieve holding by ID."""
        ...

    def find(self, portfolio_id: str, stock_id: str) -> Optional[Holding]:
        """Retrieve the holding for a (portfolio, stock) pair."""
        ...

    def list_by_portfolio(self, portfolio_id: str) -> list[Holding]:
        """List all holdings of a portfolio."""
        ...

    def list_symbols(self, portfolio_id: str) -> list[str]:
        """Symbols of all stocks held in a portfolio."""
        ...

    def create(self, holding: Holding) -> Holding:
        """Persist a new holding."""
        ...

    def update(self, holding: Holding) -> Holding:
        """Update quantity and purchase price."""
        ...

    def delete(self, holding_id: str) -> None:
        """Delete a holding."""
        ...
