"""
sync_log.py — Append-only audit log of catalog sync phases

Business Rules:
- start() creates a "running" entry keyed by a generated UUID
- complete()/fail() move an entry to its terminal status exactly once and
  stamp completed_at; a second terminal update raises SyncLogStateError
- Entries are never deleted

Called by: scheduler.py, routers/sync.py
Depends on: schemas/sync.py, models/sync.py
"""

import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from .models import SyncLog
from .schemas.sync import SyncRunLog, SyncStatus, SyncType


class SyncLogStateError(Exception):
    """Unknown log entry, or an entry that already reached a terminal status."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SyncLogStore(ABC):
    @abstractmethod
    def start(self, sync_type: SyncType) -> SyncRunLog:
        pass

    @abstractmethod
    def _finish(
        self, log_id: str, status: SyncStatus, records_processed: int | None, error_message: str | None
    ) -> SyncRunLog:
        pass

    def complete(self, log_id: str, records_processed: int) -> SyncRunLog:
        return self._finish(log_id, SyncStatus.COMPLETED, records_processed, None)

    def fail(self, log_id: str, error_message: str) -> SyncRunLog:
        return self._finish(log_id, SyncStatus.FAILED, None, error_message or "Unknown error")

    @abstractmethod
    def get(self, log_id: str) -> SyncRunLog | None:
        pass

    @abstractmethod
    def list_recent(self, limit: int = 50, sync_type: SyncType | None = None) -> list[SyncRunLog]:
        """Newest first."""


class MemorySyncLogStore(SyncLogStore):
    def __init__(self):
        self._lock = threading.Lock()
        self._logs: dict[str, SyncRunLog] = {}

    def start(self, sync_type):
        entry = SyncRunLog(
            id=str(uuid.uuid4()),
            sync_type=sync_type,
            status=SyncStatus.RUNNING,
            started_at=_utcnow(),
        )
        with self._lock:
            self._logs[entry.id] = entry
        return entry.model_copy()

    def _finish(self, log_id, status, records_processed, error_message):
        with self._lock:
            entry = self._logs.get(log_id)
            if entry is None:
                raise SyncLogStateError(f"Sync log {log_id} not found")
            if entry.status.is_terminal:
                raise SyncLogStateError(f"Sync log {log_id} already {entry.status.value}")
            changes = {"status": status, "error_message": error_message, "completed_at": _utcnow()}
            if records_processed is not None:
                changes["records_processed"] = records_processed
            entry = entry.model_copy(update=changes)
            self._logs[log_id] = entry
        return entry.model_copy()

    def get(self, log_id):
        with self._lock:
            entry = self._logs.get(log_id)
        return entry.model_copy() if entry else None

    def list_recent(self, limit=50, sync_type=None):
        with self._lock:
            entries = list(self._logs.values())
        if sync_type is not None:
            entries = [e for e in entries if e.sync_type == sync_type]
        # Insertion order breaks started_at ties
        ordered = list(reversed(entries))
        ordered.sort(key=lambda e: e.started_at, reverse=True)
        return [e.model_copy() for e in ordered[:limit]]


class SqlSyncLogStore(SyncLogStore):
    def __init__(self, session_factory=None):
        if session_factory is None:
            from .database import SessionLocal

            session_factory = SessionLocal
        self._session_factory = session_factory

    def start(self, sync_type):
        with self._session_factory.begin() as db:
            row = SyncLog(
                id=str(uuid.uuid4()),
                sync_type=SyncType(sync_type).value,
                status=SyncStatus.RUNNING.value,
                records_processed=0,
                started_at=_utcnow(),
            )
            db.add(row)
            db.flush()
            return SyncRunLog.model_validate(row)

    def _finish(self, log_id, status, records_processed, error_message):
        with self._session_factory.begin() as db:
            row = db.get(SyncLog, log_id)
            if row is None:
                raise SyncLogStateError(f"Sync log {log_id} not found")
            if SyncStatus(row.status).is_terminal:
                raise SyncLogStateError(f"Sync log {log_id} already {row.status}")
            row.status = status.value
            row.error_message = error_message
            row.completed_at = _utcnow()
            if records_processed is not None:
                row.records_processed = records_processed
            db.flush()
            return SyncRunLog.model_validate(row)

    def get(self, log_id):
        with self._session_factory() as db:
            row = db.get(SyncLog, log_id)
            return SyncRunLog.model_validate(row) if row else None

    def list_recent(self, limit=50, sync_type=None):
        with self._session_factory() as db:
            q = db.query(SyncLog)
            if sync_type is not None:
                q = q.filter(SyncLog.sync_type == SyncType(sync_type).value)
            rows = q.order_by(SyncLog.started_at.desc()).limit(limit).all()
            return [SyncRunLog.model_validate(r) for r in rows]
