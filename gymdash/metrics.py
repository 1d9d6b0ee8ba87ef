from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from pydantic import ValidationError

from .config import get_max_capacity
from .dates import resolve_day_window
from .errors import SourceUnavailable, StoreError
from .schemas import BookingStatus, DailySnapshot, MetricsResult
from .store import BOOKINGS, SESSION_OCCURRENCES, RecordStore

logger = logging.getLogger(__name__)

# Summed as-is per occurrence row; the three figures overlap and are not deduplicated.
OCCUPANCY_FIELDS = ("booked_slots", "attended_count", "override_capacity")


class MetricKind(str, Enum):
    ACTIVE_USERS = "active_users"
    BOOKINGS = "bookings"
    OCCUPANCY = "occupancy"
    PENDING = "pending"


def percentage_delta(current: float, previous: float) -> float:
    """Signed percentage change from ``previous`` to ``current``.

    A zero ``previous`` saturates: 100 when ``current`` is positive, else 0.
    The value is not rounded.
    """

    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100


def occupancy_total(rows: Iterable[Mapping[str, Any]]) -> int:
    return sum((row.get(field) or 0) for row in rows for field in OCCUPANCY_FIELDS)


def read_metric(store: RecordStore, day: str, kind: MetricKind) -> int:
    """Run the aggregate read for one metric on one day key."""

    logger.debug("Reading %s for %s", kind.value, day)
    try:
        if kind is MetricKind.ACTIVE_USERS:
            # Counts rows: two confirmed bookings by one user count twice.
            return store.count_where(
                BOOKINGS, {"session_date": day, "status": BookingStatus.CONFIRMED.value}
            )
        if kind is MetricKind.BOOKINGS:
            return store.count_where(BOOKINGS, {"session_date": day})
        if kind is MetricKind.OCCUPANCY:
            rows = store.select_where(SESSION_OCCURRENCES, {"date": day}, fields=OCCUPANCY_FIELDS)
            return occupancy_total(rows)
        if kind is MetricKind.PENDING:
            return store.count_where(
                BOOKINGS, {"session_date": day, "status": BookingStatus.PENDING.value}
            )
    except StoreError as exc:
        raise SourceUnavailable(f"Failed to load {kind.value} for {day}") from exc
    raise ValueError(f"Unsupported metric kind: {kind!r}")


def read_snapshot(store: RecordStore, day: str) -> DailySnapshot:
    counters = {kind.value: read_metric(store, day, kind) for kind in MetricKind}
    try:
        return DailySnapshot(day=day, **counters)
    except ValidationError as exc:
        # e.g. a negative override_capacity pulling occupancy below zero
        raise SourceUnavailable(f"Invalid counters for {day}: {counters}") from exc


def compute_metrics(
    store: RecordStore,
    *,
    reference: dt.datetime | dt.date | None = None,
    max_capacity: int | None = None,
) -> MetricsResult:
    """Today's counters with day-over-day deltas.

    Both snapshots are read in full before any delta is computed; a failed read
    raises :class:`SourceUnavailable` and nothing is returned.
    """

    window = resolve_day_window(reference)
    yesterday = read_snapshot(store, window.yesterday)
    today = read_snapshot(store, window.today)

    result = MetricsResult(
        active_users=today.active_users,
        bookings_today=today.bookings,
        current_occupancy=today.occupancy,
        max_capacity=get_max_capacity() if max_capacity is None else max_capacity,
        pending_approvals=today.pending,
        percent_active_change=percentage_delta(today.active_users, yesterday.active_users),
        percent_bookings_change=percentage_delta(today.bookings, yesterday.bookings),
        percent_occupancy_change=percentage_delta(today.occupancy, yesterday.occupancy),
        percent_pending_change=percentage_delta(today.pending, yesterday.pending),
    )
    logger.info("Computed metrics for %s against %s: %s", window.today, window.yesterday, result)
    return result


__all__ = [
    "MetricKind",
    "compute_metrics",
    "occupancy_total",
    "percentage_delta",
    "read_metric",
    "read_snapshot",
]
