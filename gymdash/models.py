from __future__ import annotations

import datetime as dt
import uuid

from sqlalchemy import Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    email_address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(500), nullable=True)


class Booking(Base):
    __tablename__ = "bookings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    # No foreign key: bookings may outlive or predate their user row.
    user_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    status: Mapped[str] = mapped_column(String(32), index=True, nullable=False)
    session_date: Mapped[dt.date] = mapped_column(Date, index=True, nullable=False)
    session_start_time: Mapped[str | None] = mapped_column(String(8), nullable=True)
    session_end_time: Mapped[str | None] = mapped_column(String(8), nullable=True)
    ticket_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), index=True, nullable=False)


class SessionOccurrence(Base):
    __tablename__ = "session_occurrences"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[dt.date] = mapped_column(Date, index=True, nullable=False)
    booked_slots: Mapped[int | None] = mapped_column(Integer, nullable=True)
    attended_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    override_capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)
