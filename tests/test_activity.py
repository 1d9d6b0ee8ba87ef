import pytest

from gymdash.activity import enrich_bookings, fetch_recent_bookings, load_recent_activity
from gymdash.errors import SourceUnavailable
from gymdash.store import InMemoryStore

from helpers import FailingStore


def test_recent_bookings_are_newest_first_and_limited(store):
    recent = fetch_recent_bookings(store, limit=5)
    assert [b.id for b in recent] == ["b7", "b6", "b5", "b4", "b3"]


def test_recent_limit_defaults_to_five(store):
    assert len(fetch_recent_bookings(store)) == 5


def test_ties_keep_insertion_order():
    store = InMemoryStore()
    for booking_id in ("x1", "x2", "x3"):
        store.add(
            "bookings",
            {
                "id": booking_id,
                "user_id": "u1",
                "status": "confirmed",
                "created_at": "2023-03-01T08:00:00+00:00",
            },
        )
    assert [b.id for b in fetch_recent_bookings(store, limit=5)] == ["x1", "x2", "x3"]


def test_missing_identity_keeps_booking_in_place(store):
    # five bookings, three users, only u1 and u2 exist
    feed = load_recent_activity(store, limit=5)

    assert not feed.degraded
    assert [item.id for item in feed.items] == ["b7", "b6", "b5", "b4", "b3"]
    users = {item.id: item.user for item in feed.items}
    assert users["b7"] is None
    assert users["b6"] is None
    assert users["b5"].first_name == "Ben"
    assert users["b4"].last_name == "Reyes"
    assert users["b3"].email_address == "ana@example.com"


def test_identity_lookup_is_batched_by_distinct_ids(store):
    recorder = FailingStore(store, lambda *args: False)
    load_recent_activity(recorder, limit=5)
    lookups = [detail for op, _, detail in recorder.calls if op == "select_in"]
    assert lookups == [{"id": ["u3", "u2", "u1"]}]


def test_identity_failure_degrades_instead_of_failing(store, caplog):
    failing = FailingStore(store, lambda op, record_set, detail: record_set == "users")

    feed = load_recent_activity(failing, limit=5)

    assert feed.degraded
    assert feed.degraded_reason
    assert len(feed.items) == 5
    assert all(item.user is None for item in feed.items)
    assert "Error fetching user data" in caplog.text


def test_primary_fetch_failure_is_hard(store):
    failing = FailingStore(store, lambda op, record_set, detail: record_set == "bookings")
    with pytest.raises(SourceUnavailable):
        load_recent_activity(failing)


def test_empty_feed_is_not_an_error():
    feed = load_recent_activity(InMemoryStore())
    assert feed.items == []
    assert not feed.degraded


def test_enrich_without_bookings_skips_lookup(store):
    recorder = FailingStore(store, lambda *args: True)
    assert enrich_bookings(recorder, []).items == []
    assert recorder.calls == []


def test_unknown_status_is_preserved():
    store = InMemoryStore(
        {
            "bookings": [
                {
                    "id": "z1",
                    "user_id": "u9",
                    "status": "no_show",
                    "created_at": "2023-03-01T08:00:00+00:00",
                }
            ]
        }
    )
    assert load_recent_activity(store).items[0].status == "no_show"


@pytest.mark.parametrize(("limit", "expected"), [(50, 5), (0, 1), (3, 3)])
def test_explicit_limit_is_clamped(store, limit, expected):
    assert len(fetch_recent_bookings(store, limit=limit)) == expected


def test_unorderable_bookings_fail_the_feed(store):
    store.add("bookings", {"id": "b9", "user_id": "u1", "status": "pending", "created_at": None})
    with pytest.raises(SourceUnavailable):
        fetch_recent_bookings(store)
