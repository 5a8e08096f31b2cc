"""Stock domain model."""

from dataclasses import dataclass

UNKNOWN_SECTOR = "Unknown"


@dataclass
class Stock:
    """
    A listed equity, identified by its normalized ticker symbol.

    The symbol never changes once created; name, sector and exchange
    may be backfilled while they still hold placeholder values.
    """

    stock_id: str
    symbol: str
    name: str
    sector: str = UNKNOWN_SECTOR
    exchange: str = "NSE"

    def has_placeholder_name(self) -> bool:
        return not self.name or self.name == self.symbol

    def has_placeholder_sector(self) -> bool:
        return not self.sector or self.sector == UNKNOWN_SECTOR
