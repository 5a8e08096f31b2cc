"""
Portfolio valuation: holdings joined with cached quotes -> computed view.

Pure and synchronous. Inputs are never mutated and the same input always
yields an equal PortfolioView.
"""

from decimal import Decimal
from typing import Iterable, Optional

from stockfolio.domain.views import (
    ComputedHolding,
    HoldingWithQuote,
    PortfolioTotals,
    PortfolioView,
    SectorSummary,
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _percent_or_zero(part: Decimal, whole: Decimal) -> Decimal:
    return part / whole * HUNDRED if whole > 0 else ZERO


def compute_holding(item: HoldingWithQuote, total_investment: Decimal) -> ComputedHolding:
    """
    Value one holding.

    A missing cache entry leaves cmp and everything derived from it None.
    A cached cmp of 0 (last refresh failed) is kept as 0.
    """
    holding, stock, quote = item.holding, item.stock, item.quote

    investment = holding.purchase_price * holding.quantity
    cmp: Optional[Decimal] = quote.cmp if quote is not None else None
    present_value = cmp * holding.quantity if cmp is not None else None
    gain_loss = present_value - investment if present_value is not None else None
    gain_loss_percent = (
        gain_loss / investment * HUNDRED
        if investment > 0 and gain_loss is not None
        else None
    )

    return ComputedHolding(
        holding_id=holding.holding_id,
        stock_id=stock.stock_id,
        symbol=stock.symbol,
        name=stock.name,
        sector=stock.sector,
        exchange=stock.exchange,
        quantity=holding.quantity,
        purchase_price=holding.purchase_price,
        investment=investment,
        portfolio_percent=_percent_or_zero(investment, total_investment),
        cmp=cmp,
        present_value=present_value,
        gain_loss=gain_loss,
        gain_loss_percent=gain_loss_percent,
        pe_ratio=quote.pe_ratio if quote is not None else None,
        latest_earning=quote.latest_earning if quote is not None else None,
        last_error=quote.last_error if quote is not None else None,
        cache_updated_at=quote.updated_at if quote is not None else None,
    )


def summarize_sectors(holdings: Iterable[ComputedHolding]) -> tuple[SectorSummary, ...]:
    """Group by raw sector label, in order of first appearance."""
    groups: dict[str, list[Decimal]] = {}
    counts: dict[str, int] = {}
    for h in holdings:
        investment, present_value = groups.setdefault(h.sector, [ZERO, ZERO])
        groups[h.sector] = [investment + h.investment, present_value + (h.present_value or ZERO)]
        counts[h.sector] = counts.get(h.sector, 0) + 1

    summaries = []
    for sector, (investment, present_value) in groups.items():
        gain_loss = present_value - investment
        summaries.append(
            SectorSummary(
                sector=sector,
                total_investment=investment,
                total_present_value=present_value,
                total_gain_loss=gain_loss,
                total_gain_loss_percent=_percent_or_zero(gain_loss, investment),
                holding_count=counts[sector],
            )
        )
    return tuple(summaries)


def compute_portfolio_view(holdings: Iterable[HoldingWithQuote]) -> PortfolioView:
    """
    Value every holding and roll up sector and portfolio totals.

    Unpriced holdings count toward total investment but add nothing to
    present value, so they pull the aggregate gain/loss down.
    """
    items = list(holdings)
    total_investment = sum(
        (i.holding.purchase_price * i.holding.quantity for i in items), ZERO
    )

    computed = tuple(compute_holding(i, total_investment) for i in items)

    total_present_value = sum((h.present_value or ZERO for h in computed), ZERO)
    total_gain_loss = total_present_value - total_investment

    return PortfolioView(
        holdings=computed,
        sector_summary=summarize_sectors(computed),
        totals=PortfolioTotals(
            total_investment=total_investment,
            total_present_value=total_present_value,
            total_gain_loss=total_gain_loss,
            total_gain_loss_percent=_percent_or_zero(total_gain_loss, total_investment),
        ),
    )
