from __future__ import annotations

import datetime as dt
import logging

from .activity import load_recent_activity
from .metrics import compute_metrics
from .schemas import DashboardSnapshot
from .store import RecordStore

logger = logging.getLogger(__name__)


def load_dashboard(
    store: RecordStore,
    *,
    reference: dt.datetime | dt.date | None = None,
    max_capacity: int | None = None,
    recent_limit: int | None = None,
) -> DashboardSnapshot:
    """Run one load cycle: metrics first, then the recent activity feed.

    Raises :class:`~gymdash.errors.SourceUnavailable` if any metric read or the
    recent-bookings fetch fails. A failed identity lookup only degrades the feed.
    """

    metrics = compute_metrics(store, reference=reference, max_capacity=max_capacity)
    activity = load_recent_activity(store, limit=recent_limit)
    snapshot = DashboardSnapshot(
        metrics=metrics,
        activity=activity,
        generated_at=dt.datetime.now(dt.timezone.utc),
    )
    logger.info(
        "Dashboard loaded with %d recent bookings%s",
        len(activity.items),
        " (degraded)" if activity.degraded else "",
    )
    return snapshot


__all__ = ["load_dashboard"]
