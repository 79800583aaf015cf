"""
conftest.py — Shared Test Fixtures for the storefront

Provides an in-memory SQLite database, catalog and sync-log stores for both
backends, a scripted fake vendor, and a FastAPI TestClient wired to them.

Business Rules:
- All tests run against an isolated in-memory DB (no file DB is touched)
- The TestClient is used without its context manager, so the app lifespan
  (real vendor client + scheduler) never runs; app.state is set directly
- Rate limiting is disabled unless a test turns it on

Called by: all test files via pytest autodiscovery
Depends on: storefront.models (Base), storefront.database (get_db), storefront.main
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"  # Must be set before importing storefront modules
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["VENDOR_USERNAME"] = ""
os.environ["VENDOR_PASSWORD"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.catalog_store import MemoryCatalogStore, SqlCatalogStore
from storefront.models import Base
from storefront.schemas.catalog import BrandingMethodRecord, CategoryRecord
from storefront.sync_log import MemorySyncLogStore, SqlSyncLogStore

from factories import FakeVendor, make_product

# ── In-memory SQLite engine ──────────────────────────────────────────

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture(autouse=True)
def db_session():
    """Create all tables, yield a session, then tear down."""
    Base.metadata.create_all(bind=engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


# ── Stores ───────────────────────────────────────────────────────────


@pytest.fixture(params=["memory", "sql"])
def catalog_store(request):
    """Runs the test once per Catalog Store backend."""
    if request.param == "memory":
        return MemoryCatalogStore()
    return SqlCatalogStore(TestSessionLocal)


@pytest.fixture(params=["memory", "sql"])
def sync_log_store(request):
    if request.param == "memory":
        return MemorySyncLogStore()
    return SqlSyncLogStore(TestSessionLocal)


@pytest.fixture()
def seeded_store() -> MemoryCatalogStore:
    """Two products, two categories, one screen-print branding method."""
    store = MemoryCatalogStore()
    store.replace_products([
        make_product(
            "MUG-01", name="Classic Mug", description="Ceramic coffee mug",
            base_price="89.50", category="Drinkware", brand="Acme",
            colors=["Black", "White"], stock_count=120,
        ),
        make_product(
            "BTL-02", name="Sport Bottle", description="Aluminium water bottle",
            base_price="45.00", category="Drinkware", brand="Hydra",
        ),
    ])
    store.bulk_insert_categories([
        CategoryRecord(id="DRINK", name="Drinkware", sort_order=1),
        CategoryRecord(id="BAGS", name="Bags", sort_order=2),
    ])
    store.bulk_insert_branding_methods([
        BrandingMethodRecord(
            id="SCREEN", name="Screen Print",
            base_cost="12.50", color_upcharge="3.50", setup_fee="65.00",
        ),
    ])
    return store


# ── Fake vendor ──────────────────────────────────────────────────────


@pytest.fixture()
def fake_vendor():
    return FakeVendor()


# ── FastAPI TestClient ───────────────────────────────────────────────


@pytest.fixture()
def client(db_session, seeded_store, fake_vendor):
    """TestClient over the real app with the DB and app.state collaborators swapped."""
    from storefront.database import get_db
    from storefront.main import app
    from storefront.scheduler import SyncScheduler

    def _override_db():
        yield db_session

    sync_logs = MemorySyncLogStore()
    app.dependency_overrides[get_db] = _override_db
    app.state.catalog_store = seeded_store
    app.state.sync_logs = sync_logs
    app.state.scheduler = SyncScheduler(
        client=fake_vendor, store=seeded_store, sync_logs=sync_logs, page_size=2
    )
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        for name in ("catalog_store", "sync_logs", "scheduler"):
            if hasattr(app.state, name):
                delattr(app.state, name)
