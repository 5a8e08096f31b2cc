"""
Field extraction from Google Finance quote pages.

Pure functions over page text so they can be tested against literal
fixtures. A phrase that does not match yields None, never an error.
"""

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from stockfolio.domain.views import QuotePartial

_PE_RATIO_RE = re.compile(r"P/E\s*ratio[\s\S]{0,150}?(\d+\.?\d*)", re.IGNORECASE)
_FISCAL_RE = re.compile(
    r"Fiscal\s+Q\d+\s+\d{4}\s+ended\s+(\d{1,2})/(\d{1,2})/(\d{2,4})",
    re.IGNORECASE,
)
_MONTH_YEAR_RE = re.compile(r"(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\s+(\d{4})")

_MONTHS = {
    "Jan": 1, "Feb": 2, "Mar": 3, "Apr": 4, "May": 5, "Jun": 6,
    "Jul": 7, "Aug": 8, "Sep": 9, "Oct": 10, "Nov": 11, "Dec": 12,
}


def parse_pe_ratio(text: str) -> Optional[Decimal]:
    """First decimal within 150 characters after a "P/E ratio" label."""
    match = _PE_RATIO_RE.search(text or "")
    if not match:
        return None
    try:
        return Decimal(match.group(1))
    except InvalidOperation:
        return None


def parse_latest_earning(text: str) -> Optional[date]:
    """
    Latest earnings date from either phrase shape Google uses.

    "Fiscal Q3 2024 ended 9/30/24" -> 2024-09-30
    "Oct 2024"                      -> 2024-10-01
    """
    text = text or ""
    fiscal = _FISCAL_RE.search(text)
    if fiscal:
        month, day, year = fiscal.groups()
        full_year = int(f"20{year}") if len(year) == 2 else int(year)
        try:
            return date(full_year, int(month), int(day))
        except ValueError:
            return None

    month_year = _MONTH_YEAR_RE.search(text)
    if month_year:
        return date(int(month_year.group(2)), _MONTHS[month_year.group(1)], 1)
    return None


def parse_fundamentals(text: str) -> QuotePartial:
    """P/E ratio and latest earnings date from a quote page; never a price."""
    return QuotePartial(
        pe_ratio=parse_pe_ratio(text),
        earnings_date=parse_latest_earning(text),
    )
