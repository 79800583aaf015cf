"""
dependencies.py — Shared FastAPI Dependencies

Long-lived collaborators (catalog store, sync log, scheduler) are built in
the app lifespan and parked on app.state; routers fetch them from here so
tests can swap them out by assigning app.state attributes.

Business Rules:
- cart_session_id issues a random session id on first use and keeps it in
  the signed session cookie
- Missing app.state collaborators raise 503 (app not started)

Called by: all routers
Depends on: database, catalog_store, sync_log, scheduler
"""

import logging
import uuid

from fastapi import HTTPException, Request

from .catalog_store import CatalogStore
from .scheduler import SyncScheduler
from .sync_log import SyncLogStore

log = logging.getLogger(__name__)

CART_SESSION_KEY = "cart_session_id"


def _state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise HTTPException(503, f"Service not ready: {name}")
    return value


def get_catalog_store(request: Request) -> CatalogStore:
    return _state(request, "catalog_store")


def get_sync_logs(request: Request) -> SyncLogStore:
    return _state(request, "sync_logs")


def get_scheduler(request: Request) -> SyncScheduler:
    return _state(request, "scheduler")


def cart_session_id(request: Request) -> str:
    """Dependency: the caller's cart session id, created on first use."""
    sid = request.session.get(CART_SESSION_KEY)
    if not sid:
        sid = uuid.uuid4().hex
        request.session[CART_SESSION_KEY] = sid
        log.debug("Issued cart session %s", sid[:8])
    return sid
