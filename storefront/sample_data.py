"""
sample_data.py — Development catalog for running without vendor credentials

Business Rules:
- Seeds only when the vendor is not configured and the store has no products
- Goes through the normal store writes (category and branding-method bulk
  inserts, then replace_products), so both backends behave the same
- Idempotent: a second call on a seeded store does nothing

Called by: main.py lifespan
Depends on: catalog_store.CatalogStore, schemas/catalog.py
"""

import logging

from .catalog_store import CatalogStore
from .schemas.catalog import (
    BrandingMethodRecord,
    BrandingOption,
    CategoryRecord,
    ProductRecord,
)

log = logging.getLogger(__name__)

_IMG = "https://images.unsplash.com/photo-{}?w=400"


# ── Seed rows ────────────────────────────────────────────────────────

SAMPLE_CATEGORIES = [
    CategoryRecord(id="cat-1", name="Apparel", sort_order=1,
                   description="T-shirts, polos, jackets and clothing items",
                   image_url=_IMG.format("1521572163474-6864f9cf17ab")),
    CategoryRecord(id="cat-2", name="Bags & Travel", sort_order=2,
                   description="Branded bags, backpacks, and travel accessories",
                   image_url=_IMG.format("1553062407-98eeb64c6a62")),
    CategoryRecord(id="cat-3", name="Drinkware", sort_order=3,
                   description="Mugs, bottles, tumblers and drinkware",
                   image_url=_IMG.format("1544145945-f90425340c7e")),
    CategoryRecord(id="cat-4", name="Technology", sort_order=4,
                   description="Power banks, USB drives, tech accessories",
                   image_url=_IMG.format("1468495244123-6c6c332eeece")),
    CategoryRecord(id="cat-5", name="Stationery", sort_order=5,
                   description="Pens, notebooks, desk accessories",
                   image_url=_IMG.format("1586075010923-2dd4570fb338")),
]

SAMPLE_BRANDING_METHODS = [
    BrandingMethodRecord(id="brand-1", name="Screen Print",
                         description="Traditional screen printing for vibrant colors",
                         base_cost="12.50", color_upcharge="3.50", setup_fee="65.00",
                         minimum_quantity=50),
    BrandingMethodRecord(id="brand-2", name="Embroidery",
                         description="Premium embroidered finish",
                         base_cost="18.00", setup_fee="120.00", minimum_quantity=25),
    BrandingMethodRecord(id="brand-3", name="Digital Print",
                         description="Full color digital printing",
                         base_cost="8.50", setup_fee="45.00", minimum_quantity=25),
    BrandingMethodRecord(id="brand-4", name="Laser Engraving",
                         description="Precise laser engraving for premium look",
                         base_cost="15.00", setup_fee="85.00", minimum_quantity=25),
]

_SCREEN = BrandingOption(method="screen-print", cost="12.50", setup_fee="65.00", minimum_quantity=50)
_EMBROIDERY = BrandingOption(method="embroidery", cost="18.00", setup_fee="120.00", minimum_quantity=25)
_DIGITAL = BrandingOption(method="digital-print", cost="8.50", setup_fee="45.00", minimum_quantity=25)
_LASER = BrandingOption(method="laser-engraving", cost="15.00", setup_fee="85.00", minimum_quantity=25)


def _product(pid, name, description, price, category, brand, photos, colors, sizes,
             stock, options, specs, minimum_order=25) -> ProductRecord:
    return ProductRecord(
        id=pid,
        name=name,
        description=description,
        base_price=price,
        category=category,
        brand=brand,
        images=[_IMG.format(p) for p in photos],
        colors=sorted(colors),
        sizes=sorted(sizes),
        stock_count=stock,
        branding_options=options,
        specifications=specs,
        minimum_order=minimum_order,
    )


def sample_products() -> list[ProductRecord]:
    return [
        _product("prod-1", "Classic Cotton T-Shirt",
                 "100% cotton heavyweight t-shirt. Perfect for screen printing and embroidery.",
                 "89.50", "Apparel", "Gildan",
                 ["1521572163474-6864f9cf17ab", "1529374255404-311a2a4f1fd9"],
                 ["White", "Black", "Navy", "Red", "Grey", "Royal Blue"],
                 ["S", "M", "L", "XL", "2XL", "3XL"], 850,
                 [_SCREEN, _EMBROIDERY],
                 {"fabric": "100% Cotton", "weight": "185gsm", "fit": "Regular"}),
        _product("prod-2", "Premium Polo Shirt",
                 "65/35 poly cotton pique polo with three button placket and side vents.",
                 "125.00", "Apparel", "Port Authority",
                 ["1586401100295-7a8096fd231a", "1594938298603-c8148c4dae35"],
                 ["White", "Black", "Navy", "Red", "Khaki"],
                 ["S", "M", "L", "XL", "2XL"], 420,
                 [_EMBROIDERY, _SCREEN],
                 {"fabric": "65% Polyester / 35% Cotton", "weight": "210gsm"}),
        _product("prod-3", "Insulated Travel Mug",
                 "16oz double wall stainless steel travel mug with spill-proof lid.",
                 "145.00", "Drinkware", "RTIC",
                 ["1544145945-f90425340c7e", "1571019613454-1cb2f99b2d8b"],
                 ["Stainless Steel", "Black", "White", "Blue", "Red"],
                 ["16oz"], 275,
                 [_LASER, _DIGITAL],
                 {"capacity": "16oz (473ml)", "material": "Stainless Steel"}),
        _product("prod-4", "Canvas Tote Bag",
                 "Heavy duty 12oz canvas tote bag with reinforced handles.",
                 "68.50", "Bags & Travel", "Liberty Bags",
                 ["1553062407-98eeb64c6a62", "1594633312681-425c7b97ccd1"],
                 ["Natural", "Black", "Navy", "Red", "Forest Green"],
                 ["Standard"], 650,
                 [_SCREEN, _DIGITAL],
                 {"material": "12oz Canvas", "dimensions": '15" x 16" x 6"'},
                 minimum_order=50),
        _product("prod-5", "Wireless Power Bank",
                 "10,000mAh wireless charging power bank with LED indicator and USB-C output.",
                 "285.00", "Technology", "Anker",
                 ["1468495244123-6c6c332eeece", "1609772875810-8350174b70d7"],
                 ["Black", "White"], ["Standard"], 180,
                 [_LASER, _DIGITAL],
                 {"capacity": "10,000mAh", "output": "USB-C, Wireless 10W"}),
        _product("prod-6", "Executive Pen Set",
                 "Premium metal pen set with presentation box. Perfect for corporate gifts.",
                 "195.00", "Stationery", "Cross",
                 ["1586075010923-2dd4570fb338", "1556798873-89c8637ee518"],
                 ["Silver", "Gold", "Black"], ["Standard"], 95,
                 [_LASER],
                 {"material": "Metal Construction", "packaging": "Gift Box Included"}),
    ]


# ── Seeding ──────────────────────────────────────────────────────────


def seed_sample_catalog(store: CatalogStore) -> bool:
    """Load the development catalog into an empty store. Returns True if seeded."""
    if store.count_products() > 0:
        return False
    products = sample_products()
    store.bulk_insert_categories(SAMPLE_CATEGORIES)
    store.bulk_insert_branding_methods(SAMPLE_BRANDING_METHODS)
    store.replace_products(products)
    log.info(
        "Loaded sample catalog: %d products, %d categories, %d branding methods",
        len(products), len(SAMPLE_CATEGORIES), len(SAMPLE_BRANDING_METHODS),
    )
    return True
