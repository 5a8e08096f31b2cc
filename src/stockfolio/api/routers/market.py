"""Market data API: on-demand quotes and cache refresh."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from stockfolio.api.deps import get_market_data_service
from stockfolio.api.schemas import (
    QuoteErrorResponse,
    QuoteResponse,
    RefreshRequest,
    RefreshResponse,
)
from stockfolio.core.exceptions import ValidationError
from stockfolio.services import MarketDataService

router = APIRouter(prefix="/market", tags=["market"])


@router.get("/quote", response_model=QuoteResponse, responses={404: {"model": QuoteErrorResponse}})
def get_quote(
    symbol: Optional[str] = Query(None, description="Ticker symbol (e.g. RELIANCE.NS, AAPL)"),
    service: MarketDataService = Depends(get_market_data_service),
):
    """
    Current quote for one symbol, e.g. to pre-fill a purchase price.

    Does not touch the quote cache. Responds 404 with {error, cmp: null}
    when no provider had a price.
    """
    quote = service.get_quote(symbol)
    if not quote.ok:
        return JSONResponse(status_code=404, content=QuoteErrorResponse(error=quote.error).model_dump())
    return QuoteResponse(
        symbol=quote.symbol,
        cmp=float(quote.cmp),
        pe_ratio=float(quote.pe_ratio) if quote.pe_ratio is not None else None,
        latest_earning=quote.latest_earning,
    )


@router.post("/refresh", response_model=RefreshResponse)
def refresh_market(
    data: RefreshRequest,
    service: MarketDataService = Depends(get_market_data_service),
):
    """
    Refresh cached quotes for a symbol list or for every holding of a portfolio.

    Per-symbol problems are listed in `errors`; the call itself succeeds.
    """
    if data.portfolio_id:
        result = service.refresh_portfolio(data.portfolio_id)
        if result.updated_count == 0 and not result.errors:
            return RefreshResponse(message="No holdings in portfolio", updated=0, errors=[])
    elif data.symbols:
        result = service.refresh_quotes(data.symbols)
    else:
        raise ValidationError("Provide either 'symbols' (array) or 'portfolio_id' in request body")

    return RefreshResponse(
        message=f"Refreshed {result.updated_count} symbol(s)",
        updated=result.updated_count,
        errors=result.errors,
    )
