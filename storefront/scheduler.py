"""Catalog sync scheduler — mirrors the vendor catalog on a fixed interval.

One APScheduler interval job (default every 6 hours, first run immediately
on start). Each run is a full sync, strictly in this order:
  - Categories: bulk insert (never cleared)
  - Branding methods: bulk insert (never cleared)
  - Products: paginate the vendor listing, then replace the whole table

Every phase writes one sync run log entry that ends as completed or failed.
A failed phase stops the run; the next tick starts a fresh full sync.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .catalog_sync import to_branding_method_record, to_category_record, to_product_record
from .schemas.sync import SyncType

log = logging.getLogger(__name__)

SYNC_JOB_ID = "catalog_sync"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SchedulerState(str, Enum):
    IDLE = "idle"
    SCHEDULED = "scheduled"


@dataclass
class SyncReport:
    started_at: datetime
    finished_at: datetime | None = None
    counts: dict[str, int] = field(default_factory=dict)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SyncScheduler:
    """Owns the sync timer and runs full syncs against one client and store."""

    def __init__(
        self,
        client,
        store,
        sync_logs,
        interval_hours: float = 6,
        page_size: int = 100,
        scheduler: AsyncIOScheduler | None = None,
    ):
        self.client = client
        self.store = store
        self.sync_logs = sync_logs
        self.interval_hours = interval_hours
        self.page_size = page_size
        self.state = SchedulerState.IDLE
        self.last_report: SyncReport | None = None
        self._scheduler = scheduler or AsyncIOScheduler(timezone="UTC")

    # ── Timer lifecycle ──────────────────────────────────────────────

    def start(self) -> None:
        """Arm the interval job and fire one sync right away. No-op if already armed."""
        if self.state is SchedulerState.SCHEDULED:
            log.debug("Catalog sync scheduler already started")
            return

        self._scheduler.add_job(
            self._tick,
            trigger=IntervalTrigger(hours=self.interval_hours),
            id=SYNC_JOB_ID,
            name="Full catalog sync",
            next_run_time=_now(),
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        if not self._scheduler.running:
            self._scheduler.start()
        self.state = SchedulerState.SCHEDULED
        log.info("Catalog sync scheduler started — full sync every %sh", self.interval_hours)

    def stop(self) -> None:
        """Disarm the timer. An in-flight sync keeps running to completion."""
        if self.state is SchedulerState.IDLE:
            return
        if self._scheduler.get_job(SYNC_JOB_ID):
            self._scheduler.remove_job(SYNC_JOB_ID)
        self.state = SchedulerState.IDLE
        log.info("Catalog sync scheduler stopped")

    def shutdown(self) -> None:
        """Stop and release the underlying scheduler. Call from app shutdown."""
        self.stop()
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)

    @property
    def next_run_time(self) -> datetime | None:
        job = self._scheduler.get_job(SYNC_JOB_ID)
        return job.next_run_time if job else None

    async def _tick(self) -> None:
        await self.sync_all()

    # ── Full sync ────────────────────────────────────────────────────

    async def sync_all(self) -> SyncReport:
        """Run every phase in order. Never raises; the report carries the outcome."""
        report = SyncReport(started_at=_now())
        log.info("Starting full catalog sync")
        try:
            report.counts[SyncType.CATEGORIES.value] = await self.sync_categories()
            report.counts[SyncType.BRANDING_METHODS.value] = await self.sync_branding_methods()
            report.counts[SyncType.PRODUCTS.value] = await self.sync_products()
        except Exception as e:
            report.error = str(e) or type(e).__name__
            log.error("Full catalog sync failed: %s", report.error)
        else:
            log.info("Full catalog sync completed: %s", report.counts)
        report.finished_at = _now()
        self.last_report = report
        return report

    async def _run_phase(self, sync_type: SyncType, work) -> int:
        entry = self.sync_logs.start(sync_type)
        try:
            count = await work()
            self.sync_logs.complete(entry.id, count)
        except Exception as e:
            self.sync_logs.fail(entry.id, str(e) or type(e).__name__)
            log.error("Sync %s failed: %s", sync_type.value, e)
            raise
        log.info("Synced %d %s", count, sync_type.value.replace("_", " "))
        return count

    async def sync_categories(self) -> int:
        async def work():
            categories = await self.client.fetch_categories()
            records = [to_category_record(c) for c in categories]
            self.store.bulk_insert_categories(records)
            return len(records)

        return await self._run_phase(SyncType.CATEGORIES, work)

    async def sync_branding_methods(self) -> int:
        async def work():
            methods = await self.client.fetch_branding_methods()
            records = [to_branding_method_record(m) for m in methods]
            self.store.bulk_insert_branding_methods(records)
            return len(records)

        return await self._run_phase(SyncType.BRANDING_METHODS, work)

    async def sync_products(self) -> int:
        async def work():
            synced_at = _now()
            records = []
            page = 1
            while True:
                batch = await self.client.fetch_products(page, self.page_size)
                records.extend(to_product_record(p, synced_at) for p in batch.items)
                log.info(
                    "Fetched product page %d: %d products (%d total)",
                    page, len(batch.items), len(records),
                )
                if not batch.has_more:
                    break
                page += 1
            # Only replace once the whole listing is in hand
            self.store.replace_products(records)
            return len(records)

        return await self._run_phase(SyncType.PRODUCTS, work)
