"""Date helpers for feed requests and pageview data."""

from datetime import date
from typing import Optional, Union

import pendulum

from ..errors import FeedError

DateLike = Union[date, pendulum.Date]


def requested_date(
    yyyy: Union[str, int],
    mm: Union[str, int],
    dd: Union[str, int],
    earliest: Optional[date] = None,
    today: Optional[date] = None,
) -> pendulum.Date:
    """
    Build and validate the date a feed was requested for.

    Raises:
        FeedError: 400 if the parts do not form a real date, or the date is
            before ``earliest`` or after ``today`` (UTC)
    """
    try:
        requested = pendulum.date(int(yyyy), int(mm), int(dd))
    except (TypeError, ValueError, OverflowError) as e:
        raise FeedError.invalid_date(f"Invalid date: {yyyy}/{mm}/{dd}") from e

    if earliest is not None and requested < earliest:
        raise FeedError.invalid_date(
            f"Date {requested.isoformat()} is before {earliest.isoformat()}"
        )

    if today is None:
        today = pendulum.now("UTC").date()
    if requested > today:
        raise FeedError.invalid_date(f"Date {requested.isoformat()} is in the future")

    return requested


def add_days(d: DateLike, days: int) -> pendulum.Date:
    """Shift a date by a number of days (negative for earlier)."""
    d = pendulum.date(d.year, d.month, d.day)
    if days >= 0:
        return d.add(days=days)
    return d.subtract(days=-days)


def iso8601_date(d: DateLike) -> str:
    """Format as YYYY-MM-DDZ."""
    return f"{d.isoformat()}Z"


def date_string(d: DateLike) -> str:
    """Format as YYYYMMDD."""
    return d.strftime("%Y%m%d")


def pageviews_timestamp(d: DateLike) -> str:
    """Format as the pageview API's YYYYMMDD00 timestamp."""
    return f"{date_string(d)}00"


def parse_pageviews_timestamp(timestamp: str) -> str:
    """Convert a YYYYMMDD[HH] timestamp to YYYY-MM-DDZ."""
    return f"{timestamp[0:4]}-{timestamp[4:6]}-{timestamp[6:8]}Z"
