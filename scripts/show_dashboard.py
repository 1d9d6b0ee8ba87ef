from __future__ import annotations

import logging

from gymdash.config import get_log_level
from gymdash.dashboard import load_dashboard
from gymdash.database import SessionLocal, init_db
from gymdash.errors import SourceUnavailable
from gymdash.formatting import (
    display_name,
    format_delta,
    format_session_date,
    format_time_range_12h,
    status_label,
)
from gymdash.store import SqlAlchemyStore

logging.basicConfig(level=get_log_level(), format="%(asctime)s %(levelname)s %(message)s")

init_db()


def main() -> None:
    with SessionLocal() as session:
        try:
            snapshot = load_dashboard(SqlAlchemyStore(session))
        except SourceUnavailable as exc:
            logging.error("Failed to load dashboard: %s", exc)
            raise SystemExit(1) from exc

    metrics = snapshot.metrics
    cards = [
        ("Current Active Users", metrics.active_users, metrics.percent_active_change),
        ("Today's Bookings", metrics.bookings_today, metrics.percent_bookings_change),
        (
            "Current Occupancy",
            f"{metrics.current_occupancy}/{metrics.max_capacity}",
            metrics.percent_occupancy_change,
        ),
        ("Pending Approvals", metrics.pending_approvals, metrics.percent_pending_change),
    ]
    for title, value, change in cards:
        logging.info("%s: %s (%s)", title, value, format_delta(change))

    if snapshot.activity.degraded:
        logging.warning("User details unavailable: %s", snapshot.activity.degraded_reason)
    if not snapshot.activity.items:
        logging.info("No recent booking activity.")
    for booking in snapshot.activity.items:
        logging.info(
            "%s | %s | %s | %s",
            display_name(booking),
            format_session_date(booking.session_date),
            format_time_range_12h(booking.session_start_time, booking.session_end_time),
            status_label(booking.status),
        )


if __name__ == "__main__":
    main()
