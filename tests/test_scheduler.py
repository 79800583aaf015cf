"""
test_scheduler.py — Tests for scheduler.py SyncScheduler

Covers: per-phase sync run log transitions, product pagination and the
single replace at the end, failure isolation (last-good products kept,
later phases skipped), sync_all never raising, and the APScheduler
timer lifecycle (idempotent start/stop, immediate first run).

Called by: pytest
Depends on: storefront/scheduler.py, tests/factories.py
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from storefront.catalog_store import MemoryCatalogStore
from storefront.scheduler import SYNC_JOB_ID, SchedulerState, SyncScheduler
from storefront.schemas.sync import SyncStatus, SyncType
from storefront.sync_log import MemorySyncLogStore

from factories import FakeVendor, make_product, make_vendor_product


def _scheduler(vendor, page_size=100):
    return SyncScheduler(
        client=vendor,
        store=MemoryCatalogStore(),
        sync_logs=MemorySyncLogStore(),
        page_size=page_size,
    )


def _logs_by_type(sched):
    return {e.sync_type: e for e in sched.sync_logs.list_recent()}


# ── Full sync ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_sync_all_runs_every_phase():
    sched = _scheduler(FakeVendor())
    report = await sched.sync_all()

    assert report.ok
    assert report.counts == {"categories": 1, "branding_methods": 1, "products": 3}
    assert report.finished_at >= report.started_at
    assert sched.last_report is report

    logs = _logs_by_type(sched)
    assert set(logs) == {SyncType.CATEGORIES, SyncType.BRANDING_METHODS, SyncType.PRODUCTS}
    for entry in logs.values():
        assert entry.status is SyncStatus.COMPLETED
        assert entry.completed_at is not None
    assert logs[SyncType.PRODUCTS].records_processed == 3

    assert sched.store.count_products() == 3
    assert sched.store.get_category("PENS") is not None
    assert sched.store.get_branding_method("PAD").base_cost == "4.00"


@pytest.mark.asyncio
async def test_products_phase_paginates_then_replaces_once():
    vendor = FakeVendor(products=[make_vendor_product(i) for i in range(250)])
    sched = _scheduler(vendor, page_size=100)
    sched.store.replace_products([make_product("OLD-1")])

    count = await sched.sync_products()

    assert count == 250
    assert vendor.product_pages_requested == [1, 2, 3]
    assert sched.store.count_products() == 250
    assert sched.store.get_product("OLD-1") is None


@pytest.mark.asyncio
async def test_products_failure_keeps_last_good_products():
    vendor = FakeVendor(fail_on="products")
    sched = _scheduler(vendor)
    sched.store.replace_products([make_product("KEEP-1"), make_product("KEEP-2")])

    report = await sched.sync_all()

    assert not report.ok
    assert "HTTP 500" in report.error
    assert report.counts == {"categories": 1, "branding_methods": 1}
    assert {p.id for p in sched.store.list_products()} == {"KEEP-1", "KEEP-2"}

    logs = _logs_by_type(sched)
    assert logs[SyncType.CATEGORIES].status is SyncStatus.COMPLETED
    assert logs[SyncType.PRODUCTS].status is SyncStatus.FAILED
    assert logs[SyncType.PRODUCTS].error_message == "Vendor API error: HTTP 500"


@pytest.mark.asyncio
async def test_failed_phase_stops_later_phases():
    vendor = FakeVendor(fail_on="categories")
    sched = _scheduler(vendor)

    report = await sched.sync_all()

    assert not report.ok
    assert report.counts == {}
    assert vendor.product_pages_requested == []
    logs = sched.sync_logs.list_recent()
    assert [(e.sync_type, e.status) for e in logs] == [(SyncType.CATEGORIES, SyncStatus.FAILED)]


@pytest.mark.asyncio
async def test_blank_exception_message_uses_class_name():
    sched = _scheduler(FakeVendor(fail_on="branding_methods", error=KeyError()))
    report = await sched.sync_all()
    assert report.error == "KeyError"
    assert _logs_by_type(sched)[SyncType.BRANDING_METHODS].error_message == "KeyError"


@pytest.mark.asyncio
async def test_phase_reraises_after_logging():
    sched = _scheduler(FakeVendor(fail_on="categories"))
    with pytest.raises(Exception, match="HTTP 500"):
        await sched.sync_categories()
    assert sched.sync_logs.list_recent()[0].status is SyncStatus.FAILED


@pytest.mark.asyncio
async def test_sync_all_survives_store_errors():
    sched = _scheduler(FakeVendor())
    sched.store.replace_products = MagicMock(side_effect=RuntimeError("disk full"))
    report = await sched.sync_all()
    assert report.error == "disk full"


@pytest.mark.asyncio
async def test_log_write_failure_still_closes_entry():
    sched = _scheduler(FakeVendor())
    sched.sync_logs.complete = MagicMock(side_effect=RuntimeError("db gone"))

    report = await sched.sync_all()

    assert report.error == "db gone"
    logs = sched.sync_logs.list_recent()
    assert [(e.sync_type, e.status) for e in logs] == [(SyncType.CATEGORIES, SyncStatus.FAILED)]
    assert logs[0].error_message == "db gone"


@pytest.mark.asyncio
async def test_empty_vendor_listing_clears_products():
    sched = _scheduler(FakeVendor(products=[]))
    sched.store.replace_products([make_product("GONE")])
    report = await sched.sync_all()
    assert report.counts["products"] == 0
    assert sched.store.count_products() == 0


# ── Timer lifecycle ──────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_start_is_idempotent():
    sched = _scheduler(FakeVendor())
    sched.sync_all = AsyncMock()
    try:
        sched.start()
        sched.start()
        assert sched.state is SchedulerState.SCHEDULED
        assert [j.id for j in sched._scheduler.get_jobs()] == [SYNC_JOB_ID]
        assert sched.next_run_time is not None
    finally:
        sched.shutdown()


@pytest.mark.asyncio
async def test_start_runs_first_sync_immediately():
    sched = _scheduler(FakeVendor())
    sched.sync_all = AsyncMock()
    try:
        sched.start()
        for _ in range(40):
            if sched.sync_all.await_count:
                break
            await asyncio.sleep(0.05)
        assert sched.sync_all.await_count == 1
    finally:
        sched.shutdown()


@pytest.mark.asyncio
async def test_interval_is_configurable():
    sched = SyncScheduler(
        client=FakeVendor(),
        store=MemoryCatalogStore(),
        sync_logs=MemorySyncLogStore(),
        interval_hours=2,
    )
    sched.sync_all = AsyncMock()
    try:
        sched.start()
        job = sched._scheduler.get_job(SYNC_JOB_ID)
        assert job.trigger.interval.total_seconds() == 2 * 3600
    finally:
        sched.shutdown()


@pytest.mark.asyncio
async def test_stop_removes_job_and_is_idempotent():
    sched = _scheduler(FakeVendor())
    sched.sync_all = AsyncMock()
    sched.stop()  # never started
    assert sched.state is SchedulerState.IDLE

    sched.start()
    sched.stop()
    sched.stop()
    assert sched.state is SchedulerState.IDLE
    assert sched.next_run_time is None
    sched.shutdown()


def test_new_scheduler_is_idle():
    sched = _scheduler(FakeVendor())
    assert sched.state is SchedulerState.IDLE
    assert sched.last_report is None
