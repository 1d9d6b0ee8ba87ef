from __future__ import annotations

import logging

from .config import clamp_recent_limit, get_recent_limit
from .errors import EnrichmentDegraded, SourceUnavailable, StoreError
from .schemas import ActivityFeed, BookingRecord, EnrichedBooking, UserIdentity
from .store import BOOKINGS, USERS, RecordStore

logger = logging.getLogger(__name__)

BOOKING_FIELDS = (
    "id",
    "user_id",
    "status",
    "session_start_time",
    "session_end_time",
    "session_date",
    "ticket_id",
    "created_at",
)
USER_FIELDS = ("id", "first_name", "last_name", "avatar", "email_address")


def fetch_recent_bookings(store: RecordStore, *, limit: int | None = None) -> list[BookingRecord]:
    """Newest bookings first, by creation time, at most five."""

    limit = get_recent_limit() if limit is None else clamp_recent_limit(limit)
    try:
        rows = store.select_where(
            BOOKINGS, fields=BOOKING_FIELDS, order_by="created_at", descending=True, limit=limit
        )
    except StoreError as exc:
        raise SourceUnavailable("Failed to load recent bookings") from exc
    return [BookingRecord.model_validate(row) for row in rows]


def _lookup_identities(store: RecordStore, user_ids: list[str]) -> dict[str, UserIdentity]:
    try:
        rows = store.select_in(USERS, "id", user_ids)
    except StoreError as exc:
        raise EnrichmentDegraded("Failed to load user identities") from exc
    identities = {}
    for row in rows:
        identity = UserIdentity.model_validate({field: row.get(field) for field in USER_FIELDS})
        identities[identity.id] = identity
    return identities


def enrich_bookings(store: RecordStore, bookings: list[BookingRecord]) -> ActivityFeed:
    """Attach user identities to ``bookings`` with one batched lookup.

    A booking without a matching user is kept with ``user=None``. When the
    lookup itself fails the feed is returned degraded, every booking without
    identity.
    """

    if not bookings:
        return ActivityFeed()

    user_ids = list(dict.fromkeys(booking.user_id for booking in bookings))
    try:
        identities = _lookup_identities(store, user_ids)
    except EnrichmentDegraded as exc:
        logger.warning("Error fetching user data: %s", exc.__cause__ or exc)
        return ActivityFeed(
            items=[EnrichedBooking(**booking.model_dump()) for booking in bookings],
            degraded=True,
            degraded_reason=str(exc),
        )

    items = [
        EnrichedBooking(**booking.model_dump(), user=identities.get(booking.user_id))
        for booking in bookings
    ]
    missing = sum(1 for item in items if item.user is None)
    if missing:
        logger.debug("%d of %d recent bookings have no matching user", missing, len(items))
    return ActivityFeed(items=items)


def load_recent_activity(store: RecordStore, *, limit: int | None = None) -> ActivityFeed:
    return enrich_bookings(store, fetch_recent_bookings(store, limit=limit))


__all__ = ["enrich_bookings", "fetch_recent_bookings", "load_recent_activity"]
