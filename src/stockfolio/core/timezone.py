"""Time helpers: UTC timestamps."""

from datetime import date, datetime
from typing import Union

import pytz

UTC = pytz.utc


def now_utc() -> datetime:
    """Return current time in UTC."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC; naive datetimes are assumed to be UTC already."""
    if dt.tzinfo is None:
        return UTC.localize(dt)
    return dt.astimezone(UTC)


def date_from_timestamp(value: Union[int, float]) -> date:
    """Calendar date (UTC) of a unix timestamp in seconds."""
    return datetime.fromtimestamp(float(value), UTC).date()

