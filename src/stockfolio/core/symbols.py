"""Ticker symbol normalization."""

from typing import Iterable, Optional


def normalize_symbol(s: Optional[str]) -> Optional[str]:
    """Normalize symbol: strip whitespace and uppercase; None or empty -> None."""
    if s is None:
        return None
    stripped = str(s).strip().upper()
    return stripped if stripped else None


def unique_symbols(symbols: Iterable[Optional[str]]) -> list[str]:
    """Normalize, drop blanks and de-duplicate while keeping first-seen order."""
    seen: dict[str, None] = {}
    for raw in symbols:
        symbol = normalize_symbol(raw)
        if symbol and symbol not in seen:
            seen[symbol] = None
    return list(seen)
