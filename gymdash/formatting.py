"""Display helpers for dashboard values. Empty input renders as an empty string."""
from __future__ import annotations

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal

from .schemas import BookingRecord, BookingStatus, EnrichedBooking, UserIdentity

STATUS_LABELS = {
    BookingStatus.CONFIRMED.value: "Confirmed",
    BookingStatus.CANCELLED_BY_USER.value: "Cancelled by User",
    BookingStatus.CANCELLED_BY_ADMIN.value: "Cancelled by Admin",
}

# Fixed en-US names; %B would follow the process locale.
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def format_session_date(value: dt.date | str | None) -> str:
    """Render a day as ``March 1, 2024``."""

    if not value:
        return ""
    day = value if isinstance(value, dt.date) else dt.date.fromisoformat(value[:10])
    return f"{MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"


def _to_12h(value: str) -> str:
    hour, minute = (int(part) for part in value.split(":")[:2])
    suffix = "PM" if hour >= 12 else "AM"
    hour12 = hour % 12 or 12
    return f"{hour12}:{minute:02d} {suffix}"


def format_time_range_12h(start: str | None, end: str | None) -> str:
    """``"09:00", "10:30"`` becomes ``"9:00 AM - 10:30 AM"``."""

    if not start or not end:
        return ""
    return f"{_to_12h(start)} - {_to_12h(end)}"


def format_delta(value: float) -> str:
    """Whole-percent change, halves rounded away from zero; the sign follows ``value``."""

    whole = Decimal(str(abs(value))).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "+" if value >= 0 else "-"
    return f"{sign}{whole}% from yesterday"


def delta_trend(value: float) -> str:
    if abs(value) < 1:
        return "flat"
    return "up" if value > 0 else "down"


def status_label(status: str) -> str:
    if not status:
        return ""
    return STATUS_LABELS.get(status, status[0].upper() + status[1:])


def display_name(booking: BookingRecord | EnrichedBooking) -> str:
    user = getattr(booking, "user", None)
    if user is not None and user.first_name and user.last_name:
        return f"{user.first_name} {user.last_name}"
    return f"User {booking.user_id}"


def initials(user: UserIdentity | None) -> str:
    if user is None:
        return ""
    return "".join(name[0] for name in (user.first_name, user.last_name) if name).upper()


__all__ = [
    "delta_trend",
    "display_name",
    "format_delta",
    "format_session_date",
    "format_time_range_12h",
    "initials",
    "status_label",
]
