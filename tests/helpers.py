from __future__ import annotations

import datetime as dt

from gymdash.errors import StoreError
from gymdash.store import InMemoryStore


REFERENCE_DAY = dt.date(2023, 3, 1)
TODAY = "2023-03-01"
YESTERDAY = "2023-02-28"


def booking(booking_id, user_id, status, session_date, created_at, **extra):
    row = {
        "id": booking_id,
        "user_id": user_id,
        "status": status,
        "session_date": session_date,
        "session_start_time": "09:00",
        "session_end_time": "10:30",
        "created_at": created_at,
        "ticket_id": None,
    }
    row.update(extra)
    return row


class FailingStore:
    """Wrap a store and raise StoreError for reads matching ``fail_when``."""

    def __init__(self, inner, fail_when):
        self._inner = inner
        self._fail_when = fail_when
        self.calls = []

    def _check(self, operation, record_set, detail):
        self.calls.append((operation, record_set, detail))
        if self._fail_when(operation, record_set, detail):
            raise StoreError(f"{operation} on {record_set} unavailable")

    def count_where(self, record_set, where=None):
        self._check("count_where", record_set, dict(where or {}))
        return self._inner.count_where(record_set, where)

    def select_where(self, record_set, where=None, **kwargs):
        self._check("select_where", record_set, dict(where or {}))
        return self._inner.select_where(record_set, where, **kwargs)

    def select_in(self, record_set, field, values):
        values = list(values)
        self._check("select_in", record_set, {field: values})
        return self._inner.select_in(record_set, field, values)


def build_store() -> InMemoryStore:
    return InMemoryStore(
        {
            "bookings": [
                booking("b1", "u1", "confirmed", YESTERDAY, "2023-02-27T08:00:00+00:00"),
                booking("b2", "u2", "pending", YESTERDAY, "2023-02-27T09:00:00+00:00"),
                booking("b3", "u1", "confirmed", TODAY, "2023-02-28T10:00:00+00:00"),
                booking("b4", "u1", "confirmed", TODAY, "2023-02-28T11:00:00+00:00"),
                booking("b5", "u2", "cancelled_by_user", TODAY, "2023-02-28T12:00:00+00:00"),
                booking("b6", "u3", "pending", TODAY, "2023-02-28T13:00:00+00:00"),
                booking("b7", "u3", "pending", TODAY, "2023-02-28T14:00:00+00:00"),
            ],
            "session_occurrences": [
                {"date": YESTERDAY, "booked_slots": 3, "attended_count": 1, "override_capacity": None},
                {"date": TODAY, "booked_slots": 5, "attended_count": 2, "override_capacity": 1},
                {"date": TODAY, "booked_slots": 1, "attended_count": None, "override_capacity": 0},
            ],
            "users": [
                {"id": "u1", "first_name": "Ana", "last_name": "Reyes", "email_address": "ana@example.com"},
                {"id": "u2", "first_name": "Ben", "last_name": None, "avatar": "ben.png"},
            ],
        }
    )
