from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException

from .activity import load_recent_activity
from .config import clamp_recent_limit
from .dashboard import load_dashboard
from .database import SessionLocal, init_db
from .errors import SourceUnavailable
from .metrics import compute_metrics
from .schemas import ActivityFeed, DashboardSnapshot, MetricsResult
from .store import SqlAlchemyStore

logger = logging.getLogger(__name__)

init_db()

app = FastAPI(title="Gym Booking Dashboard")


def get_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def get_store(session=Depends(get_session)) -> SqlAlchemyStore:
    return SqlAlchemyStore(session)


def _unavailable(exc: SourceUnavailable) -> HTTPException:
    logger.exception("Dashboard data unavailable")
    return HTTPException(status_code=502, detail=str(exc))


@app.get("/api/health")
async def api_health():
    return {"status": "ok"}


@app.get("/api/dashboard", response_model=DashboardSnapshot)
async def api_dashboard(store=Depends(get_store)):
    try:
        return load_dashboard(store)
    except SourceUnavailable as exc:
        raise _unavailable(exc) from exc


@app.get("/api/metrics", response_model=MetricsResult)
async def api_metrics(store=Depends(get_store)):
    try:
        return compute_metrics(store)
    except SourceUnavailable as exc:
        raise _unavailable(exc) from exc


@app.get("/api/activity", response_model=ActivityFeed)
async def api_activity(limit: int | None = None, store=Depends(get_store)):
    if limit is not None:
        limit = clamp_recent_limit(limit)
    try:
        return load_recent_activity(store, limit=limit)
    except SourceUnavailable as exc:
        raise _unavailable(exc) from exc
