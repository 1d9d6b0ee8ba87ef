from __future__ import annotations

import datetime as dt
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DayWindow:
    today: str
    yesterday: str


def day_key(day: dt.date) -> str:
    """Serialize a calendar day as ``YYYY-MM-DD``."""
    return day.isoformat()


def local_date(reference: dt.datetime | dt.date | None = None) -> dt.date:
    """Return the calendar day of ``reference`` in the local timezone.

    Naive datetimes are taken as local wall time; aware ones are converted.
    """

    if reference is None:
        return dt.date.today()
    if isinstance(reference, dt.datetime):
        if reference.tzinfo is not None:
            reference = reference.astimezone()
        return reference.date()
    return reference


def resolve_day_window(reference: dt.datetime | dt.date | None = None) -> DayWindow:
    today = local_date(reference)
    # Date arithmetic, not a 24h shift, so DST changes cannot skew the day.
    yesterday = today - dt.timedelta(days=1)
    return DayWindow(today=day_key(today), yesterday=day_key(yesterday))


__all__ = ["DayWindow", "day_key", "local_date", "resolve_day_window"]
