"""
Storefront — promotional products catalog, branding calculator, cart and quotes.

App factory wiring: logging, stores, vendor client, sync scheduler, routers.
Schema is managed by Alembic (`alembic upgrade head`), not at startup.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.sessions import SessionMiddleware

from .catalog_store import MemoryCatalogStore, SqlCatalogStore
from .config import Settings, settings
from .connectors.vendor import VendorClient
from .http_client import close_clients
from .logging_config import setup_logging
from .rate_limit import limiter
from .routers import cart, catalog, quotes, sync
from .sample_data import seed_sample_catalog
from .scheduler import SyncScheduler
from .sync_log import MemorySyncLogStore, SqlSyncLogStore


def build_services(cfg: Settings) -> dict:
    """Construct the long-lived collaborators parked on app.state."""
    if cfg.catalog_backend == "memory":
        store, sync_logs = MemoryCatalogStore(), MemorySyncLogStore()
    elif cfg.catalog_backend == "sql":
        store, sync_logs = SqlCatalogStore(), SqlSyncLogStore()
    else:
        raise ValueError(f"Unknown catalog_backend: {cfg.catalog_backend!r}")

    scheduler = SyncScheduler(
        client=VendorClient.from_settings(cfg),
        store=store,
        sync_logs=sync_logs,
        interval_hours=cfg.sync_interval_hours,
        page_size=cfg.sync_page_size,
    )
    return {"catalog_store": store, "sync_logs": sync_logs, "scheduler": scheduler}


# ═══════════════════════════════════════════════════════════════════════════════
# LIFESPAN
# ═══════════════════════════════════════════════════════════════════════════════


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    for name, value in build_services(settings).items():
        setattr(app.state, name, value)

    scheduler: SyncScheduler = app.state.scheduler
    if settings.sync_enabled and settings.vendor_configured:
        scheduler.start()
    elif settings.sync_enabled:
        logger.warning("Vendor credentials not set; catalog sync scheduler not started")

    if not settings.vendor_configured and settings.sample_data_enabled:
        seed_sample_catalog(app.state.catalog_store)

    logger.info("Storefront started (catalog backend: {})", settings.catalog_backend)
    yield

    scheduler.shutdown()
    await close_clients()
    logger.info("Storefront stopped")


# ═══════════════════════════════════════════════════════════════════════════════
# APP
# ═══════════════════════════════════════════════════════════════════════════════

app = FastAPI(title="Storefront", version="1.0.0", lifespan=lifespan)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.secret_key,
    https_only=settings.app_url.startswith("https"),
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.include_router(catalog.router)
app.include_router(sync.router)
app.include_router(cart.router)
app.include_router(quotes.router)


@app.get("/health")
async def health(request: Request):
    scheduler = getattr(request.app.state, "scheduler", None)
    store = getattr(request.app.state, "catalog_store", None)
    next_run = scheduler.next_run_time if scheduler else None
    return {
        "status": "ok",
        "products": store.count_products() if store else None,
        "scheduler": scheduler.state.value if scheduler else "unavailable",
        "next_sync": next_run.isoformat() if next_run else None,
    }
