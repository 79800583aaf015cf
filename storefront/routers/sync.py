"""
routers/sync.py — On-demand catalog sync and sync run history

Endpoints:
- POST /api/sync        run a full sync now (rate-limited)
- GET  /api/sync/logs   recent sync run log entries, newest first

Business Rules:
- A failed sync returns 502 with the phase error; the timer keeps running
- On-demand and timer syncs are not mutually excluded

Called by: main.py (router mount)
Depends on: scheduler, sync_log, rate_limit
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from loguru import logger

from ..config import settings
from ..dependencies import get_scheduler, get_sync_logs
from ..rate_limit import limiter
from ..scheduler import SyncScheduler
from ..schemas.sync import SyncLogListResponse, SyncTriggerResponse, SyncType
from ..sync_log import SyncLogStore

router = APIRouter(tags=["sync"])


@router.post("/api/sync", response_model=SyncTriggerResponse)
@limiter.limit(settings.rate_limit_sync)
async def trigger_sync(request: Request, scheduler: SyncScheduler = Depends(get_scheduler)):
    logger.info("Manual catalog sync requested from {}", request.client.host if request.client else "?")
    report = await scheduler.sync_all()
    if not report.ok:
        raise HTTPException(502, f"Sync failed: {report.error}")
    return SyncTriggerResponse(success=True, message="Sync completed", counts=report.counts)


@router.get("/api/sync/logs", response_model=SyncLogListResponse)
async def list_sync_logs(
    sync_type: SyncType | None = None,
    limit: int = Query(50, ge=1, le=500),
    sync_logs: SyncLogStore = Depends(get_sync_logs),
):
    logs = sync_logs.list_recent(limit=limit, sync_type=sync_type)
    return SyncLogListResponse(logs=logs, total=len(logs))
