"""
catalog_sync.py — Vendor shapes → local catalog records

Pure transformation used by the sync scheduler between fetching from the
vendor and writing to the Catalog Store.

Business Rules:
- Money is stored as two-place fixed-point strings ("89.50")
- colors = de-duplicated variant colors, sizes = de-duplicated union of
  variant sizes, stock_count = sum of variant stock
- Derived fields are sorted so any variant order gives the same record
- Missing arrays/maps default to empty; nothing here raises on bad input

Called by: scheduler.py
Depends on: connectors/vendor.py, schemas/catalog.py
"""

from datetime import datetime, timezone

from .connectors.vendor import (
    VendorBrandingMethod,
    VendorCategory,
    VendorProduct,
    VendorVariant,
)
from .schemas.catalog import (
    BrandingMethodRecord,
    BrandingOption,
    CategoryRecord,
    ProductRecord,
)
from .utils import to_money


def derive_variant_fields(variants: list[VendorVariant]) -> tuple[list[str], list[str], int]:
    """Return (colors, sizes, stock_count) for a product's variants."""
    colors = sorted({v.color for v in variants if v.color})
    sizes = sorted({s for v in variants for s in v.sizes if s})
    stock_count = sum(v.stock for v in variants)
    return colors, sizes, stock_count


def to_product_record(product: VendorProduct, synced_at: datetime | None = None) -> ProductRecord:
    colors, sizes, stock_count = derive_variant_fields(product.variants)
    return ProductRecord(
        id=product.id,
        name=product.name,
        description=product.description,
        base_price=to_money(product.price),
        category=product.category,
        brand=product.brand or None,
        images=list(product.images),
        colors=colors,
        sizes=sizes,
        stock_count=stock_count,
        branding_options=[
            BrandingOption(
                method=o.method,
                cost=to_money(o.cost),
                setup_fee=to_money(o.setup_fee),
                minimum_quantity=o.minimum_quantity,
            )
            for o in product.branding_options
        ],
        specifications=dict(product.specifications),
        minimum_order=product.minimum_order,
        is_active=True,
        last_updated=synced_at or datetime.now(timezone.utc),
    )


def to_category_record(category: VendorCategory) -> CategoryRecord:
    return CategoryRecord(
        id=category.id,
        name=category.name,
        description=category.description,
        image_url=category.image_url,
        parent_id=category.parent_id,
        sort_order=category.sort_order,
    )


def to_branding_method_record(method: VendorBrandingMethod) -> BrandingMethodRecord:
    return BrandingMethodRecord(
        id=method.id,
        name=method.name,
        description=method.description,
        base_cost=to_money(method.base_cost),
        color_upcharge=to_money(method.color_upcharge),
        setup_fee=to_money(method.setup_fee),
        minimum_quantity=method.minimum_quantity,
    )
