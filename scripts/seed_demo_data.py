"""Fill the configured database with random users, bookings and occurrences.

Only meant for local dashboards without real data.
"""
from __future__ import annotations

import datetime as dt
import logging
import random

from gymdash import crud
from gymdash.config import get_log_level
from gymdash.database import init_db, session_scope
from gymdash.schemas import BookingStatus

logging.basicConfig(level=get_log_level(), format="%(asctime)s %(levelname)s %(message)s")

init_db()

FIRST_NAMES = ["Ana", "Ben", "Carla", "Dario", "Ella", "Felix", "Gina", "Hugo"]
LAST_NAMES = ["Reyes", "Santos", "Cruz", "Garcia", "Lim", "Tan"]
SLOTS = [("07:00", "08:00"), ("09:00", "10:30"), ("12:00", "13:00"), ("17:30", "19:00")]
STATUSES = [status.value for status in BookingStatus]


def main(users: int = 8, bookings_per_day: int = 10) -> None:
    today = dt.date.today()
    days = [today - dt.timedelta(days=1), today]

    with session_scope() as session:
        people = [
            crud.add_user(
                session,
                first_name=random.choice(FIRST_NAMES),
                last_name=random.choice(LAST_NAMES),
            )
            for _ in range(users)
        ]
        session.flush()

        now = dt.datetime.now(dt.timezone.utc)
        for day in days:
            for _ in range(bookings_per_day):
                start, end = random.choice(SLOTS)
                crud.add_booking(
                    session,
                    user_id=random.choice(people).id,
                    status=random.choice(STATUSES),
                    session_date=day,
                    start_time=start,
                    end_time=end,
                    created_at=now - dt.timedelta(minutes=random.randint(0, 2880)),
                )
            for _ in SLOTS:
                crud.add_session_occurrence(
                    session,
                    date=day,
                    booked_slots=random.randint(0, 5),
                    attended_count=random.randint(0, 3),
                    override_capacity=random.choice([None, 0, 2]),
                )
    logging.info("Seeded %d users and %d bookings over %s", users, bookings_per_day * len(days), days)


if __name__ == "__main__":
    main()
