"""Stock catalogue API, plus upstream ticker search."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from stockfolio.api.deps import get_holding_service, get_market_data_service
from stockfolio.api.schemas import (
    StockCacheResponse,
    StockListResponse,
    StockResponse,
    SymbolMatchResponse,
    SymbolSearchResponse,
)
from stockfolio.domain.models import QuoteCacheEntry, Stock
from stockfolio.services import HoldingService, MarketDataService

router = APIRouter(prefix="/stocks", tags=["stocks"])


def _cache_response(entry: Optional[QuoteCacheEntry]) -> Optional[StockCacheResponse]:
    if entry is None:
        return None
    return StockCacheResponse(
        cmp=float(entry.cmp),
        pe_ratio=float(entry.pe_ratio) if entry.pe_ratio is not None else None,
        latest_earning=entry.latest_earning,
        last_error=entry.last_error,
        updated_at=entry.updated_at,
    )


def _stock_response(stock: Stock, cache: Optional[QuoteCacheEntry] = None) -> StockResponse:
    return StockResponse(
        id=stock.stock_id,
        symbol=stock.symbol,
        name=stock.name,
        sector=stock.sector,
        exchange=stock.exchange,
        cache=_cache_response(cache),
    )


@router.get("", response_model=StockListResponse)
def list_stocks(
    search: Optional[str] = Query(None, description="Substring of symbol or name"),
    sector: Optional[str] = Query(None, description="Substring of sector"),
    service: HoldingService = Depends(get_holding_service),
):
    stocks = service.list_stocks(search, sector)
    quotes = service.cached_quotes(stocks)
    return StockListResponse(stocks=[_stock_response(s, quotes.get(s.stock_id)) for s in stocks])


@router.get("/search", response_model=SymbolSearchResponse)
def search_symbols(
    q: Optional[str] = Query(None, description="Company name or ticker, at least 2 characters"),
    service: MarketDataService = Depends(get_market_data_service),
):
    """
    Look up tickers upstream, e.g. to pick a symbol before a purchase.

    Matches need not be in the catalogue yet. 400 for short queries,
    502 when the search source fails.
    """
    return SymbolSearchResponse(
        stocks=[
            SymbolMatchResponse(symbol=m.symbol, name=m.name, exchange=m.exchange, type=m.quote_type)
            for m in service.search_symbols(q)
        ]
    )


@router.get("/{symbol}", response_model=StockResponse)
def get_stock(symbol: str, service: HoldingService = Depends(get_holding_service)):
    stock = service.get_stock(symbol)
    return _stock_response(stock, service.cached_quotes([stock]).get(stock.stock_id))
