from __future__ import annotations

from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from .config import get_database_url


class Base(DeclarativeBase):
    pass


def make_engine(url: str | None = None) -> Engine:
    url = url or get_database_url()
    connect_args = {}
    if url.startswith("sqlite"):
        # FastAPI runs sync dependencies in a worker thread.
        connect_args["check_same_thread"] = False
    return create_engine(url, future=True, echo=False, connect_args=connect_args)


ENGINE = make_engine()
SessionLocal = sessionmaker(bind=ENGINE, autoflush=False, autocommit=False, future=True)


def init_db(engine: Engine | None = None) -> None:
    """Create the bookings, session_occurrences and users tables if missing."""

    from . import models  # noqa: F401  registers the tables on Base.metadata

    Base.metadata.create_all(bind=engine or ENGINE)


@contextmanager
def session_scope(factory: sessionmaker = SessionLocal) -> Session:
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:  # pragma: no cover - passthrough to raise after rollback
        session.rollback()
        raise
    finally:
        session.close()
