"""
test_catalog_sync.py — Tests for catalog_sync.py (vendor shapes → catalog records)

Called by: pytest
Depends on: storefront/catalog_sync.py
"""

from datetime import datetime, timezone
from decimal import Decimal
from itertools import permutations

from storefront.catalog_sync import (
    derive_variant_fields,
    to_branding_method_record,
    to_category_record,
    to_product_record,
)
from storefront.connectors.vendor import (
    VendorBrandingMethod,
    VendorBrandingOption,
    VendorCategory,
    VendorProduct,
    VendorVariant,
    parse_product,
)

VARIANTS = [
    VendorVariant(color="Red", sizes=["M", "L"], stock=10),
    VendorVariant(color="Blue", sizes=["S", "M"], stock=5),
    VendorVariant(color="Red", sizes=["XL"], stock=0),
    VendorVariant(color="", sizes=[], stock=2),
]


def test_derive_variant_fields():
    colors, sizes, stock = derive_variant_fields(VARIANTS)
    assert colors == ["Blue", "Red"]
    assert sizes == ["L", "M", "S", "XL"]
    assert stock == 17


def test_derive_variant_fields_is_order_independent():
    expected = derive_variant_fields(VARIANTS)
    for perm in permutations(VARIANTS):
        assert derive_variant_fields(list(perm)) == expected


def test_derive_variant_fields_empty():
    assert derive_variant_fields([]) == ([], [], 0)


def test_to_product_record_formats_money_and_defaults():
    synced = datetime(2026, 5, 1, tzinfo=timezone.utc)
    product = VendorProduct(
        id="MUG-01",
        name="Classic Mug",
        price=Decimal("89.5"),
        variants=VARIANTS,
        branding_options=[VendorBrandingOption(method="Screen", cost=Decimal("12.5"), setup_fee=Decimal("65"))],
    )
    rec = to_product_record(product, synced)

    assert rec.base_price == "89.50"
    assert rec.category == "Uncategorized"
    assert rec.brand is None
    assert rec.colors == ["Blue", "Red"]
    assert rec.stock_count == 17
    assert rec.branding_options[0].cost == "12.50"
    assert rec.branding_options[0].setup_fee == "65.00"
    assert rec.is_active is True
    assert rec.last_updated == synced


def test_to_product_record_rounds_half_up():
    rec = to_product_record(VendorProduct(id="X", price=Decimal("2.675")))
    assert rec.base_price == "2.68"


def test_out_of_range_vendor_money_falls_back_to_zero():
    raw = {
        "SimpleCode": "X1",
        "Price": "1e30",
        "BrandingOptions": [{"Method": "Screen", "Cost": "-5e20", "SetupFee": "65"}],
    }
    rec = to_product_record(parse_product(raw))
    assert rec.base_price == "0.00"
    assert rec.branding_options[0].cost == "0.00"
    assert rec.branding_options[0].setup_fee == "65.00"

    method = to_branding_method_record(VendorBrandingMethod(id="M", base_cost=Decimal("1e30")))
    assert method.base_cost == "0.00"


def test_to_category_record():
    rec = to_category_record(VendorCategory(id="PENS", name="Pens", parent_id="WRITING", sort_order=4))
    assert (rec.id, rec.name, rec.parent_id, rec.sort_order) == ("PENS", "Pens", "WRITING", 4)


def test_to_branding_method_record():
    rec = to_branding_method_record(
        VendorBrandingMethod(id="SCREEN", base_cost=Decimal("12.5"), color_upcharge=Decimal("3.5"))
    )
    assert rec.base_cost == "12.50"
    assert rec.color_upcharge == "3.50"
    assert rec.setup_fee == "0.00"
