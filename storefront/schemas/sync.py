"""
schemas/sync.py — Sync run log records and sync trigger responses

Business Rules:
- A run log starts as "running" and moves exactly once to
  "completed" or "failed"
- completed_at is set on both terminal statuses

Called by: sync_log.py, scheduler.py, routers/sync.py
Depends on: pydantic
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class SyncType(str, Enum):
    CATEGORIES = "categories"
    BRANDING_METHODS = "branding_methods"
    PRODUCTS = "products"


class SyncStatus(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not SyncStatus.RUNNING


class SyncRunLog(BaseModel, from_attributes=True):
    id: str
    sync_type: SyncType
    status: SyncStatus = SyncStatus.RUNNING
    records_processed: int = 0
    error_message: str | None = None
    started_at: datetime
    completed_at: datetime | None = None


class SyncTriggerResponse(BaseModel):
    success: bool = True
    message: str = "Sync completed"
    counts: dict[str, int] = Field(default_factory=dict)


class SyncLogListResponse(BaseModel):
    logs: list[SyncRunLog] = Field(default_factory=list)
    total: int = 0
