"""Quote resolution across an ordered chain of providers, with cache write-back."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from stockfolio.core.symbols import normalize_symbol, unique_symbols
from stockfolio.core.timezone import now_utc
from stockfolio.domain.models import QuoteCacheEntry
from stockfolio.domain.views import Quote, QuotePartial, RefreshResult
from stockfolio.providers.market_data_provider import QuoteProvider
from stockfolio.repositories.protocols import QuoteCacheRepository, StockRepository
from stockfolio.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThrottlePolicy:
    """Fixed pauses between symbols of a batch."""

    symbol_delay_seconds: float = 0.3
    not_found_delay_seconds: float = 0.1


class QuoteResolver:
    """
    Turns symbols into consolidated quotes.

    price_providers[0] is authoritative for price and the rest are backups,
    tried in order only when it has no usable price. Every fundamentals
    provider is queried; its P/E ratio and earnings date take precedence
    over the price providers'. A field once resolved is never overwritten
    by a later None.

    Neither refresh() nor get_quote() raises: failures come back as
    messages.
    """

    def __init__(
        self,
        stock_repo: StockRepository,
        quote_cache_repo: QuoteCacheRepository,
        price_providers: Sequence[QuoteProvider],
        fundamentals_providers: Sequence[QuoteProvider] = (),
        rate_limiter: Optional[RateLimiter] = None,
        throttle: Optional[ThrottlePolicy] = None,
    ):
        if not price_providers:
            raise ValueError("At least one price provider is required")
        self._stock_repo = stock_repo
        self._quote_cache_repo = quote_cache_repo
        self._price_providers = list(price_providers)
        self._fundamentals_providers = list(fundamentals_providers)
        self._rate_limiter = rate_limiter or RateLimiter()
        self._throttle = throttle or ThrottlePolicy()

    def resolve(self, symbol: str, exchange_hint: Optional[str] = None) -> Quote:
        """Run the provider chain for one symbol. Touches no storage."""
        primary, *backups = self._price_providers
        price_errors: list[str] = []

        first = self._call(primary, symbol, exchange_hint)
        price = first.price if first.has_price else None
        if first.error_message:
            price_errors.append(first.error_message)

        pe_ratio: Optional[Decimal] = None
        earnings = None
        for provider in self._fundamentals_providers:
            extra = self._call(provider, symbol, exchange_hint)
            if extra.error_message:
                logger.info("%s: %s gave no fundamentals: %s", symbol, provider.name, extra.error_message)
            pe_ratio = pe_ratio if pe_ratio is not None else extra.pe_ratio
            earnings = earnings if earnings is not None else extra.earnings_date

        pe_ratio = pe_ratio if pe_ratio is not None else first.pe_ratio
        earnings = earnings if earnings is not None else first.earnings_date

        if price is None:
            for provider in backups:
                backup = self._call(provider, symbol, exchange_hint)
                if backup.error_message:
                    price_errors.append(backup.error_message)
                pe_ratio = pe_ratio if pe_ratio is not None else backup.pe_ratio
                earnings = earnings if earnings is not None else backup.earnings_date
                if backup.has_price:
                    logger.info("%s: price from backup provider %s", symbol, provider.name)
                    price = backup.price
                    break

        if price is None:
            message = price_errors[0] if price_errors else f"No price available for {symbol}"
            return Quote(
                symbol=symbol,
                cmp=Decimal("0"),
                pe_ratio=pe_ratio,
                latest_earning=earnings,
                error=message,
            )
        return Quote(symbol=symbol, cmp=price, pe_ratio=pe_ratio, latest_earning=earnings)

    def refresh(self, symbols: Iterable[str]) -> RefreshResult:
        """
        Resolve each distinct symbol in turn and upsert its cache entry once.

        Unknown stocks are reported as "Stock not found: <symbol>" and
        leave the cache untouched.
        """
        result = RefreshResult()

        for symbol in unique_symbols(symbols):
            stock = self._stock_repo.find_by_symbol(symbol)
            if stock is None:
                result.errors.append(f"Stock not found: {symbol}")
                self._rate_limiter.pause(self._throttle.not_found_delay_seconds)
                continue

            quote = self.resolve(symbol, stock.exchange)
            try:
                self._quote_cache_repo.upsert(self._to_cache_entry(stock.stock_id, quote))
            except Exception as exc:
                logger.exception("Failed to write quote cache for %s", symbol)
                result.errors.append(f"{symbol}: Failed to write quote cache: {exc}")
                self._rate_limiter.pause(self._throttle.symbol_delay_seconds)
                continue

            if quote.ok:
                result.updated_count += 1
            else:
                result.errors.append(f"{symbol}: {quote.error}")
            self._rate_limiter.pause(self._throttle.symbol_delay_seconds)

        logger.info(
            "Quote refresh finished: %d updated, %d error(s)",
            result.updated_count,
            len(result.errors),
        )
        return result

    def get_quote(self, symbol: str) -> Quote:
        """On-demand lookup through the same chain. Never writes the cache."""
        normalized = normalize_symbol(symbol)
        if normalized is None:
            return Quote(symbol="", cmp=Decimal("0"), error="Symbol is required")
        stock = self._stock_repo.find_by_symbol(normalized)
        return self.resolve(normalized, stock.exchange if stock else None)

    def _call(self, provider: QuoteProvider, symbol: str, exchange_hint: Optional[str]) -> QuotePartial:
        self._rate_limiter.acquire(provider.name)
        try:
            return provider.resolve_quote(symbol, exchange_hint)
        except Exception as exc:
            logger.exception("Provider %s raised for %s", provider.name, symbol)
            return QuotePartial.failure(f"{provider.name} failed: {str(exc) or type(exc).__name__}")

    @staticmethod
    def _to_cache_entry(stock_id: str, quote: Quote) -> QuoteCacheEntry:
        return QuoteCacheEntry(
            stock_id=stock_id,
            cmp=quote.cmp if quote.ok else Decimal("0"),
            pe_ratio=quote.pe_ratio,
            latest_earning=quote.latest_earning,
            last_error=quote.error,
            updated_at=now_utc(),
        )
