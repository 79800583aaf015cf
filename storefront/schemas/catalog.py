"""
schemas/catalog.py — Catalog records mirrored from the vendor

The Catalog Store accepts and returns these records regardless of backend
(memory or SQL). Money fields are two-place fixed-point strings.

Called by: catalog_sync.py, catalog_store.py, routers/catalog.py
Depends on: pydantic
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BrandingOption(BaseModel):
    """Per-product branding offer as listed by the vendor. Informational only."""
    method: str = ""
    cost: str = "0.00"
    setup_fee: str = "0.00"
    minimum_quantity: int = 1


class ProductRecord(BaseModel, from_attributes=True):
    id: str
    name: str = ""
    description: str = ""
    base_price: str = "0.00"
    category: str = "Uncategorized"
    brand: str | None = None
    images: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    sizes: list[str] = Field(default_factory=list)
    stock_count: int = 0
    branding_options: list[BrandingOption] = Field(default_factory=list)
    specifications: dict = Field(default_factory=dict)
    minimum_order: int = 1
    is_active: bool = True
    last_updated: datetime = Field(default_factory=_utcnow)


class CategoryRecord(BaseModel, from_attributes=True):
    id: str
    name: str = ""
    description: str = ""
    image_url: str | None = None
    parent_id: str | None = None
    sort_order: int = 0


class BrandingMethodRecord(BaseModel, from_attributes=True):
    id: str
    name: str = ""
    description: str = ""
    base_cost: str = "0.00"
    color_upcharge: str = "0.00"
    setup_fee: str = "0.00"
    minimum_quantity: int = 1


class ProductListResponse(BaseModel):
    products: list[ProductRecord] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20
    has_more: bool = False
