"""
pricing.py — Branding cost calculator

Pure formula, reproduced server-side for the calculator endpoint and
for cart line pricing:

    productCost  = P × Q
    brandingCost = B × Q + U × (C − 1) × Q
    subtotal     = productCost + brandingCost + F
    tax          = subtotal × tax_rate          (0.15 by default)
    total        = subtotal + tax
    perUnit      = total / Q

P base price, Q quantity, B branding base cost, U per-extra-color
upcharge, F setup fee, C selected colors (clamped to at least 1).

Business Rules:
- Decimal arithmetic throughout; outputs rounded half-up to cents
- Quantity must be at least 1
- Unknown product or branding method → NotFoundError

Called by: routers/catalog.py, services/cart_service.py
Depends on: catalog_store.py (lookups only)
"""

from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal

from ..utils import CENTS, safe_decimal
from . import NotFoundError

DEFAULT_TAX_RATE = Decimal("0.15")


def _cents(v: Decimal) -> Decimal:
    return v.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class BrandingCost:
    product_cost: Decimal
    branding_cost: Decimal
    setup_fee: Decimal
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    per_unit: Decimal

    def as_dict(self) -> dict[str, float]:
        return {k: float(v) for k, v in asdict(self).items()}


def calculate_branding_cost(
    base_price,
    quantity: int,
    base_cost,
    color_upcharge=0,
    setup_fee=0,
    colors: int = 1,
    tax_rate=DEFAULT_TAX_RATE,
) -> BrandingCost:
    if quantity < 1:
        raise ValueError("quantity must be at least 1")
    q = Decimal(quantity)
    c = Decimal(max(1, int(colors)))
    price = safe_decimal(base_price)
    base = safe_decimal(base_cost)
    upcharge = safe_decimal(color_upcharge)
    setup = safe_decimal(setup_fee)
    rate = safe_decimal(tax_rate, DEFAULT_TAX_RATE)

    product_cost = price * q
    branding_cost = base * q + upcharge * (c - 1) * q
    subtotal = product_cost + branding_cost + setup
    tax = subtotal * rate
    total = subtotal + tax

    return BrandingCost(
        product_cost=_cents(product_cost),
        branding_cost=_cents(branding_cost),
        setup_fee=_cents(setup),
        subtotal=_cents(subtotal),
        tax=_cents(tax),
        total=_cents(total),
        per_unit=_cents(total / q),
    )


def quote_branding(
    store,
    product_id: str,
    branding_method_id: str,
    quantity: int,
    colors: int = 1,
    tax_rate=DEFAULT_TAX_RATE,
) -> BrandingCost:
    """Price a branded order from catalog data."""
    product = store.get_product(product_id)
    method = store.get_branding_method(branding_method_id)
    if product is None or method is None:
        raise NotFoundError("Product or branding method not found")
    return calculate_branding_cost(
        base_price=product.base_price,
        quantity=quantity,
        base_cost=method.base_cost,
        color_upcharge=method.color_upcharge,
        setup_fee=method.setup_fee,
        colors=colors,
        tax_rate=tax_rate,
    )
