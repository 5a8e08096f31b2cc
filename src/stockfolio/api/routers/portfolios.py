"""Portfolio and holding API."""

from fastapi import APIRouter, Depends, Response

from stockfolio.api.deps import get_holding_service
from stockfolio.api.schemas import (
    ComputedHoldingResponse,
    HoldingCreateRequest,
    HoldingResponse,
    HoldingsListResponse,
    HoldingUpdateRequest,
    PortfolioCreate,
    PortfolioRename,
    PortfolioResponse,
    PortfolioViewResponse,
    SectorSummaryResponse,
)
from stockfolio.domain.models import Holding, Portfolio
from stockfolio.domain.views import ComputedHolding, SectorSummary
from stockfolio.services import HoldingCreate, HoldingService, HoldingUpdate

router = APIRouter(prefix="/portfolios", tags=["portfolios"])


def _float(value):
    return float(value) if value is not None else None


def _portfolio_response(portfolio: Portfolio) -> PortfolioResponse:
    return PortfolioResponse(
        id=portfolio.portfolio_id,
        user_id=portfolio.user_id,
        name=portfolio.name,
        created_at=portfolio.created_at,
    )


def _holding_response(holding: Holding) -> HoldingResponse:
    return HoldingResponse(
        id=holding.holding_id,
        portfolio_id=holding.portfolio_id,
        stock_id=holding.stock_id,
        quantity=float(holding.quantity),
        purchase_price=float(holding.purchase_price),
    )


def _computed_response(h: ComputedHolding) -> ComputedHoldingResponse:
    return ComputedHoldingResponse(
        id=h.holding_id,
        stock_id=h.stock_id,
        symbol=h.symbol,
        name=h.name,
        sector=h.sector,
        exchange=h.exchange,
        quantity=float(h.quantity),
        purchase_price=float(h.purchase_price),
        investment=float(h.investment),
        portfolio_percent=float(h.portfolio_percent),
        cmp=_float(h.cmp),
        present_value=_float(h.present_value),
        gain_loss=_float(h.gain_loss),
        gain_loss_percent=_float(h.gain_loss_percent),
        pe_ratio=_float(h.pe_ratio),
        latest_earning=h.latest_earning,
        last_error=h.last_error,
        cache_updated_at=h.cache_updated_at,
    )


def _sector_response(s: SectorSummary) -> SectorSummaryResponse:
    return SectorSummaryResponse(
        sector=s.sector,
        total_investment=float(s.total_investment),
        total_present_value=float(s.total_present_value),
        total_gain_loss=float(s.total_gain_loss),
        total_gain_loss_percent=float(s.total_gain_loss_percent),
        holding_count=s.holding_count,
    )


@router.post("", response_model=PortfolioResponse, status_code=201)
def create_portfolio(data: PortfolioCreate, service: HoldingService = Depends(get_holding_service)):
    """Create the portfolio of a user (one per user)."""
    return _portfolio_response(service.create_portfolio(data.user_id, data.name))


@router.get("/by-user/{user_id}", response_model=PortfolioResponse)
def get_portfolio_for_user(user_id: str, service: HoldingService = Depends(get_holding_service)):
    return _portfolio_response(service.get_portfolio_for_user(user_id))


@router.get("/{portfolio_id}", response_model=PortfolioViewResponse)
def get_portfolio(portfolio_id: str, service: HoldingService = Depends(get_holding_service)):
    """Portfolio with computed holdings, sector summary and totals, from cached quotes."""
    portfolio = service.get_portfolio(portfolio_id)
    view = service.get_portfolio_view(portfolio_id)
    return PortfolioViewResponse(
        id=portfolio.portfolio_id,
        user_id=portfolio.user_id,
        name=portfolio.name,
        created_at=portfolio.created_at,
        total_investment=float(view.totals.total_investment),
        total_present_value=float(view.totals.total_present_value),
        total_gain_loss=float(view.totals.total_gain_loss),
        total_gain_loss_percent=float(view.totals.total_gain_loss_percent),
        holdings=[_computed_response(h) for h in view.holdings],
        sector_summary=[_sector_response(s) for s in view.sector_summary],
    )


@router.patch("/{portfolio_id}", response_model=PortfolioResponse)
def rename_portfolio(
    portfolio_id: str,
    data: PortfolioRename,
    service: HoldingService = Depends(get_holding_service),
):
    return _portfolio_response(service.rename_portfolio(portfolio_id, data.name))


@router.get("/{portfolio_id}/holdings", response_model=HoldingsListResponse)
def list_holdings(portfolio_id: str, service: HoldingService = Depends(get_holding_service)):
    view = service.get_portfolio_view(portfolio_id)
    return HoldingsListResponse(
        portfolio_id=portfolio_id,
        holdings=[_computed_response(h) for h in view.holdings],
    )


@router.post("/{portfolio_id}/holdings", response_model=HoldingResponse, status_code=201)
def add_holding(
    portfolio_id: str,
    data: HoldingCreateRequest,
    service: HoldingService = Depends(get_holding_service),
):
    """Record a purchase. Buying a held stock again merges at weighted-average cost."""
    holding = service.add_holding(
        portfolio_id,
        HoldingCreate(
            symbol=data.symbol,
            quantity=data.quantity,
            purchase_price=data.purchase_price,
            name=data.name,
            sector=data.sector,
            exchange=data.exchange,
        ),
    )
    return _holding_response(holding)


@router.patch("/{portfolio_id}/holdings/{holding_id}", response_model=HoldingResponse)
def update_holding(
    portfolio_id: str,
    holding_id: str,
    data: HoldingUpdateRequest,
    service: HoldingService = Depends(get_holding_service),
):
    holding = service.update_holding(
        portfolio_id,
        holding_id,
        HoldingUpdate(quantity=data.quantity, purchase_price=data.purchase_price),
    )
    return _holding_response(holding)


@router.delete("/{portfolio_id}/holdings/{holding_id}", status_code=204)
def delete_holding(
    portfolio_id: str,
    holding_id: str,
    service: HoldingService = Depends(get_holding_service),
):
    service.delete_holding(portfolio_id, holding_id)
    return Response(status_code=204)
