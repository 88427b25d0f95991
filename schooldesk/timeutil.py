"""Date keys, stored instants and ISO-8601 projection."""
from __future__ import annotations

import calendar
from datetime import date, datetime, time, timezone
from typing import Union

DateLike = Union[date, datetime, str]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_date(value: DateLike) -> date:
    """Accept a date, a datetime or an ISO string and return the calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    value = value.strip()
    if "T" in value:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return date.fromisoformat(value)


def date_key(value: DateLike) -> str:
    """Daily document key, e.g. ``2026-10-18``."""
    return as_date(value).strftime("%Y-%m-%d")


def day_start(value: DateLike) -> datetime:
    """Midnight of the calendar date as naive UTC, the form Mongo stores and returns."""
    return datetime.combine(as_date(value), time.min)


def day_end(value: DateLike) -> datetime:
    return datetime.combine(as_date(value), time(23, 59, 59, 999000))


def to_iso(value: datetime | None) -> str | None:
    """ISO-8601 string with an explicit offset.

    Mongo hands back naive datetimes; those are UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def month_bounds(value: DateLike) -> tuple[date, date]:
    d = as_date(value)
    last = calendar.monthrange(d.year, d.month)[1]
    return date(d.year, d.month, 1), date(d.year, d.month, last)


def month_label(value: DateLike) -> str:
    """``October 2026`` style label used to key payroll months."""
    d = as_date(value)
    return f"{calendar.month_name[d.month]} {d.year}"
