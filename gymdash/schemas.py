from __future__ import annotations

import datetime as dt
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    WAITLISTED = "waitlisted"
    CANCELLED_BY_USER = "cancelled_by_user"
    CANCELLED_BY_ADMIN = "cancelled_by_admin"


class UserIdentity(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    first_name: str | None = None
    last_name: str | None = None
    email_address: str | None = None
    avatar: str | None = None


class BookingRecord(BaseModel):
    # status stays a plain string so unknown values survive the round trip
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    user_id: str
    status: str
    session_date: dt.date | None = None
    session_start_time: str | None = None
    session_end_time: str | None = None
    created_at: dt.datetime
    ticket_id: str | None = None


class EnrichedBooking(BookingRecord):
    user: UserIdentity | None = None


class ActivityFeed(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: list[EnrichedBooking] = Field(default_factory=list)
    degraded: bool = False
    degraded_reason: str | None = None


class DailySnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: str
    active_users: int = Field(ge=0)
    bookings: int = Field(ge=0)
    occupancy: int = Field(ge=0)
    pending: int = Field(ge=0)


class MetricsResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    active_users: int
    bookings_today: int
    current_occupancy: int
    max_capacity: int
    pending_approvals: int
    percent_active_change: float
    percent_bookings_change: float
    percent_occupancy_change: float
    percent_pending_change: float


class DashboardSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    metrics: MetricsResult
    activity: ActivityFeed
    generated_at: dt.datetime
