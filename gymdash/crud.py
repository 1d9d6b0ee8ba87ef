from __future__ import annotations

import datetime as dt

from sqlalchemy.orm import Session

from .models import Booking, SessionOccurrence, User


def add_user(
    session: Session,
    *,
    first_name: str | None = None,
    last_name: str | None = None,
    email_address: str | None = None,
    avatar: str | None = None,
    user_id: str | None = None,
) -> User:
    user = User(
        first_name=first_name,
        last_name=last_name,
        email_address=email_address,
        avatar=avatar,
    )
    if user_id is not None:
        user.id = user_id
    session.add(user)
    return user


def add_booking(
    session: Session,
    *,
    user_id: str,
    status: str,
    session_date: dt.date,
    start_time: str | None = None,
    end_time: str | None = None,
    created_at: dt.datetime | None = None,
    ticket_id: str | None = None,
    booking_id: str | None = None,
) -> Booking:
    booking = Booking(
        user_id=user_id,
        status=status,
        session_date=session_date,
        session_start_time=start_time,
        session_end_time=end_time,
        created_at=created_at or dt.datetime.now(dt.timezone.utc),
        ticket_id=ticket_id,
    )
    if booking_id is not None:
        booking.id = booking_id
    session.add(booking)
    return booking


def add_session_occurrence(
    session: Session,
    *,
    date: dt.date,
    booked_slots: int | None = None,
    attended_count: int | None = None,
    override_capacity: int | None = None,
) -> SessionOccurrence:
    occurrence = SessionOccurrence(
        date=date,
        booked_slots=booked_slots,
        attended_count=attended_count,
        override_capacity=override_capacity,
    )
    session.add(occurrence)
    return occurrence
