"""
catalog_store.py — Local mirror of the vendor catalog

One interface, two backends: an in-memory map (process-local, used for
development and tests) and a SQLAlchemy store over the products,
categories and branding_methods tables.

Business Rules:
- replace_products clears every product and inserts the new list as one
  step; readers see either the old or the new set, never a mix
- Categories and branding methods are only ever added to; a repeated
  identifier overwrites the earlier row (last write wins)
- Product reads only ever return active records
- Search is a case-insensitive substring match on name, description, brand
- Only the sync scheduler mutates the store; request paths only read

Called by: scheduler.py, routers/catalog.py, services/pricing.py, services/cart_service.py
Depends on: schemas/catalog.py, models/catalog.py
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Iterable

from sqlalchemy import func, or_

from .models import BrandingMethod, Category, Product
from .schemas.catalog import BrandingMethodRecord, CategoryRecord, ProductRecord

log = logging.getLogger(__name__)


class CatalogStore(ABC):
    @abstractmethod
    def replace_products(self, records: Iterable[ProductRecord]) -> int:
        """Delete all products, then insert records. Returns the stored count."""

    @abstractmethod
    def bulk_insert_categories(self, records: Iterable[CategoryRecord]) -> int:
        pass

    @abstractmethod
    def bulk_insert_branding_methods(self, records: Iterable[BrandingMethodRecord]) -> int:
        pass

    @abstractmethod
    def list_products(
        self, category: str | None = None, brand: str | None = None, search: str | None = None
    ) -> list[ProductRecord]:
        pass

    @abstractmethod
    def get_product(self, product_id: str) -> ProductRecord | None:
        pass

    @abstractmethod
    def count_products(self) -> int:
        pass

    @abstractmethod
    def list_categories(self) -> list[CategoryRecord]:
        pass

    @abstractmethod
    def get_category(self, category_id: str) -> CategoryRecord | None:
        pass

    @abstractmethod
    def list_branding_methods(self) -> list[BrandingMethodRecord]:
        pass

    @abstractmethod
    def get_branding_method(self, method_id: str) -> BrandingMethodRecord | None:
        pass


def _dedupe(records: Iterable) -> dict:
    """Index records by id; later duplicates replace earlier ones."""
    return {r.id: r for r in records}


def product_matches(
    p: ProductRecord, category: str | None, brand: str | None, search: str | None
) -> bool:
    if not p.is_active:
        return False
    if category and p.category != category:
        return False
    if brand and p.brand != brand:
        return False
    if search:
        needle = search.lower()
        haystack = (p.name, p.description or "", p.brand or "")
        if not any(needle in text.lower() for text in haystack):
            return False
    return True


# ── In-memory backend ─────────────────────────────────────────────────


class MemoryCatalogStore(CatalogStore):
    """Map-backed store. Reads copy a snapshot under the lock."""

    def __init__(self):
        self._lock = threading.RLock()
        self._products: dict[str, ProductRecord] = {}
        self._categories: dict[str, CategoryRecord] = {}
        self._branding_methods: dict[str, BrandingMethodRecord] = {}

    def replace_products(self, records):
        fresh = _dedupe(r.model_copy(deep=True) for r in records)
        with self._lock:
            self._products = fresh
        return len(fresh)

    def bulk_insert_categories(self, records):
        batch = _dedupe(r.model_copy(deep=True) for r in records)
        with self._lock:
            self._categories.update(batch)
        return len(batch)

    def bulk_insert_branding_methods(self, records):
        batch = _dedupe(r.model_copy(deep=True) for r in records)
        with self._lock:
            self._branding_methods.update(batch)
        return len(batch)

    def list_products(self, category=None, brand=None, search=None):
        with self._lock:
            snapshot = list(self._products.values())
        hits = [p for p in snapshot if product_matches(p, category, brand, search)]
        hits.sort(key=lambda p: (p.name.lower(), p.id))
        return [p.model_copy(deep=True) for p in hits]

    def get_product(self, product_id):
        with self._lock:
            p = self._products.get(product_id)
        return p.model_copy(deep=True) if p else None

    def count_products(self):
        with self._lock:
            return len(self._products)

    def list_categories(self):
        with self._lock:
            snapshot = list(self._categories.values())
        snapshot.sort(key=lambda c: (c.sort_order, c.name.lower(), c.id))
        return [c.model_copy() for c in snapshot]

    def get_category(self, category_id):
        with self._lock:
            c = self._categories.get(category_id)
        return c.model_copy() if c else None

    def list_branding_methods(self):
        with self._lock:
            snapshot = list(self._branding_methods.values())
        snapshot.sort(key=lambda m: (m.name.lower(), m.id))
        return [m.model_copy() for m in snapshot]

    def get_branding_method(self, method_id):
        with self._lock:
            m = self._branding_methods.get(method_id)
        return m.model_copy() if m else None


# ── SQL backend ───────────────────────────────────────────────────────


class SqlCatalogStore(CatalogStore):
    """SQLAlchemy store. Each mutation runs in its own transaction."""

    def __init__(self, session_factory=None):
        if session_factory is None:
            from .database import SessionLocal

            session_factory = SessionLocal
        self._session_factory = session_factory

    def replace_products(self, records):
        fresh = _dedupe(records)
        with self._session_factory.begin() as db:
            deleted = db.query(Product).delete(synchronize_session=False)
            db.add_all(Product(**r.model_dump()) for r in fresh.values())
        log.info("Products replaced: %d removed, %d inserted", deleted, len(fresh))
        return len(fresh)

    def bulk_insert_categories(self, records):
        batch = _dedupe(records)
        with self._session_factory.begin() as db:
            for r in batch.values():
                db.merge(Category(**r.model_dump()))
        return len(batch)

    def bulk_insert_branding_methods(self, records):
        batch = _dedupe(records)
        with self._session_factory.begin() as db:
            for r in batch.values():
                db.merge(BrandingMethod(**r.model_dump()))
        return len(batch)

    def list_products(self, category=None, brand=None, search=None):
        with self._session_factory() as db:
            q = db.query(Product).filter(Product.is_active.is_(True))
            if category:
                q = q.filter(Product.category == category)
            if brand:
                q = q.filter(Product.brand == brand)
            if search:
                needle = search.lower()
                q = q.filter(
                    or_(
                        func.lower(Product.name).contains(needle, autoescape=True),
                        func.lower(Product.description).contains(needle, autoescape=True),
                        func.lower(Product.brand).contains(needle, autoescape=True),
                    )
                )
            rows = q.order_by(func.lower(Product.name), Product.id).all()
            return [ProductRecord.model_validate(r) for r in rows]

    def get_product(self, product_id):
        with self._session_factory() as db:
            row = db.get(Product, product_id)
            return ProductRecord.model_validate(row) if row else None

    def count_products(self):
        with self._session_factory() as db:
            return db.query(func.count(Product.id)).scalar() or 0

    def list_categories(self):
        with self._session_factory() as db:
            rows = db.query(Category).order_by(
                Category.sort_order, func.lower(Category.name), Category.id
            ).all()
            return [CategoryRecord.model_validate(r) for r in rows]

    def get_category(self, category_id):
        with self._session_factory() as db:
            row = db.get(Category, category_id)
            return CategoryRecord.model_validate(row) if row else None

    def list_branding_methods(self):
        with self._session_factory() as db:
            rows = db.query(BrandingMethod).order_by(
                func.lower(BrandingMethod.name), BrandingMethod.id
            ).all()
            return [BrandingMethodRecord.model_validate(r) for r in rows]

    def get_branding_method(self, method_id):
        with self._session_factory() as db:
            row = db.get(BrandingMethod, method_id)
            return BrandingMethodRecord.model_validate(row) if row else None
