"""Record-store capability consumed by the metrics and activity readers.

Three read shapes are required: ``count_where``, ``select_where`` and
``select_in``. Predicates are conjunctions of equality tests passed as a
mapping of field name to value. Rows come back as plain dicts.
"""
from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol

from sqlalchemy import Date, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import StoreError
from .models import Booking, SessionOccurrence, User

logger = logging.getLogger(__name__)

BOOKINGS = "bookings"
SESSION_OCCURRENCES = "session_occurrences"
USERS = "users"

Row = dict[str, Any]


class RecordStore(Protocol):
    def count_where(self, record_set: str, where: Mapping[str, Any] | None = None) -> int:
        ...

    def select_where(
        self,
        record_set: str,
        where: Mapping[str, Any] | None = None,
        *,
        fields: Sequence[str] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        ...

    def select_in(self, record_set: str, field: str, values: Iterable[Any]) -> list[Row]:
        ...


class SqlAlchemyStore:
    """Serve record-set reads from the ORM tables through one session."""

    record_sets = {
        BOOKINGS: Booking,
        SESSION_OCCURRENCES: SessionOccurrence,
        USERS: User,
    }

    def __init__(self, session: Session) -> None:
        self._session = session

    def count_where(self, record_set: str, where: Mapping[str, Any] | None = None) -> int:
        model = self._model(record_set)
        stmt = select(func.count()).select_from(model).where(*self._predicates(model, where))
        try:
            return int(self._session.scalar(stmt) or 0)
        except SQLAlchemyError as exc:
            raise StoreError(f"Count on {record_set} failed") from exc

    def select_where(
        self,
        record_set: str,
        where: Mapping[str, Any] | None = None,
        *,
        fields: Sequence[str] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        model = self._model(record_set)
        stmt = select(*self._columns(model, fields)).where(*self._predicates(model, where))
        if order_by is not None:
            column = self._column(model, order_by)
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return self._fetch(record_set, stmt)

    def select_in(self, record_set: str, field: str, values: Iterable[Any]) -> list[Row]:
        model = self._model(record_set)
        column = self._column(model, field)
        wanted = list(values)
        if not wanted:
            return []
        stmt = select(*self._columns(model, None)).where(column.in_(wanted))
        return self._fetch(record_set, stmt)

    def _fetch(self, record_set: str, stmt) -> list[Row]:
        try:
            return [dict(row._mapping) for row in self._session.execute(stmt)]
        except SQLAlchemyError as exc:
            raise StoreError(f"Select on {record_set} failed") from exc

    def _model(self, record_set: str):
        try:
            return self.record_sets[record_set]
        except KeyError:
            raise StoreError(f"Unknown record set {record_set!r}") from None

    def _column(self, model, field: str):
        column = model.__table__.columns.get(field)
        if column is None:
            raise StoreError(f"Unknown field {field!r} on {model.__tablename__}")
        return column

    def _columns(self, model, fields: Sequence[str] | None) -> list:
        if fields is None:
            return list(model.__table__.columns)
        return [self._column(model, field) for field in fields]

    def _predicates(self, model, where: Mapping[str, Any] | None) -> list:
        predicates = []
        for field, value in (where or {}).items():
            column = self._column(model, field)
            if isinstance(column.type, Date) and isinstance(value, str):
                try:
                    value = dt.date.fromisoformat(value)
                except ValueError as exc:
                    raise StoreError(f"Invalid day key {value!r} for {field}") from exc
            predicates.append(column == value)
        return predicates


def _comparable(value: Any) -> Any:
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    return value


def _sort_key(value: Any) -> Any:
    # ISO strings order as timestamps so mixed UTC offsets compare correctly
    if isinstance(value, str):
        text = value[:-1] + "+00:00" if value.endswith("Z") else value
        try:
            return dt.datetime.fromisoformat(text)
        except ValueError:
            return value
    return value


class InMemoryStore:
    """Record sets held as lists of dicts, kept in insertion order."""

    def __init__(self, records: Mapping[str, Iterable[Mapping[str, Any]]] | None = None) -> None:
        self._records: dict[str, list[Row]] = {BOOKINGS: [], SESSION_OCCURRENCES: [], USERS: []}
        for record_set, rows in (records or {}).items():
            self._records[record_set] = [dict(row) for row in rows]

    def add(self, record_set: str, row: Mapping[str, Any]) -> None:
        self._rows(record_set).append(dict(row))

    def count_where(self, record_set: str, where: Mapping[str, Any] | None = None) -> int:
        return len(self._matching(record_set, where))

    def select_where(
        self,
        record_set: str,
        where: Mapping[str, Any] | None = None,
        *,
        fields: Sequence[str] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        rows = self._matching(record_set, where)
        if order_by is not None:
            # sorted() is stable, so ties keep insertion order in both directions
            try:
                rows = sorted(rows, key=lambda row: _sort_key(row.get(order_by)), reverse=descending)
            except TypeError as exc:
                raise StoreError(f"Cannot order {record_set} by {order_by}") from exc
        if limit is not None:
            rows = rows[:limit]
        if fields is not None:
            return [{field: row.get(field) for field in fields} for row in rows]
        return [dict(row) for row in rows]

    def select_in(self, record_set: str, field: str, values: Iterable[Any]) -> list[Row]:
        wanted = {_comparable(value) for value in values}
        return [dict(row) for row in self._rows(record_set) if _comparable(row.get(field)) in wanted]

    def _rows(self, record_set: str) -> list[Row]:
        try:
            return self._records[record_set]
        except KeyError:
            raise StoreError(f"Unknown record set {record_set!r}") from None

    def _matching(self, record_set: str, where: Mapping[str, Any] | None) -> list[Row]:
        conditions = {field: _comparable(value) for field, value in (where or {}).items()}
        return [
            row
            for row in self._rows(record_set)
            if all(_comparable(row.get(field)) == value for field, value in conditions.items())
        ]


__all__ = [
    "BOOKINGS",
    "InMemoryStore",
    "RecordStore",
    "SESSION_OCCURRENCES",
    "SqlAlchemyStore",
    "USERS",
]
