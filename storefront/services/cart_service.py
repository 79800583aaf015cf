"""
cart_service.py — Session-scoped shopping cart

Each browser session owns one cart (rows in cart_items keyed by session_id).

Business Rules:
- unit_price is the product's base price at the time the item is added
- branding_cost is per unit: (branding cost + setup fee) / quantity for the
  chosen method and color count; 0.00 when no method is chosen
- Changing quantity, method or colors re-prices branding; unit_price stays
- Cart total = Σ (unit_price + branding_cost) × quantity
- Items from another session are invisible (404, never cross-session edits)

Called by: routers/cart.py, services/quote_service.py
Depends on: models/orders.py, catalog_store.py, services/pricing.py
"""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from ..models import CartItem
from ..utils import safe_decimal, to_money
from . import NotFoundError
from .pricing import calculate_branding_cost

log = logging.getLogger(__name__)


# ── Pricing helpers ─────────────────────────────────────────────────────


def _branding_cost_per_unit(store, method_id: str | None, quantity: int, colors: int) -> str:
    if not method_id:
        return "0.00"
    method = store.get_branding_method(method_id)
    if method is None:
        raise NotFoundError(f"Branding method {method_id} not found")
    cost = calculate_branding_cost(
        base_price=0,
        quantity=quantity,
        base_cost=method.base_cost,
        color_upcharge=method.color_upcharge,
        setup_fee=method.setup_fee,
        colors=colors,
        tax_rate=0,
    )
    return to_money((cost.branding_cost + cost.setup_fee) / quantity)


def line_total(item: CartItem) -> Decimal:
    return (safe_decimal(item.unit_price) + safe_decimal(item.branding_cost)) * item.quantity


def item_to_dict(item: CartItem) -> dict:
    return {
        "id": item.id,
        "product_id": item.product_id,
        "quantity": item.quantity,
        "selected_color": item.selected_color,
        "selected_size": item.selected_size,
        "branding_method_id": item.branding_method_id,
        "branding_colors": item.branding_colors,
        "custom_branding": item.custom_branding,
        "unit_price": item.unit_price,
        "branding_cost": item.branding_cost,
        "line_total": to_money(line_total(item)),
        "created_at": item.created_at.isoformat() if item.created_at else None,
    }


# ── Reads ───────────────────────────────────────────────────────────────


def get_cart(db: Session, session_id: str) -> list[CartItem]:
    return (
        db.query(CartItem)
        .filter(CartItem.session_id == session_id)
        .order_by(CartItem.created_at, CartItem.id)
        .all()
    )


def cart_total(db: Session, session_id: str) -> Decimal:
    return sum((line_total(i) for i in get_cart(db, session_id)), Decimal("0"))


def _get_owned_item(db: Session, session_id: str, item_id: str) -> CartItem:
    item = db.get(CartItem, item_id)
    if item is None or item.session_id != session_id:
        raise NotFoundError(f"Cart item {item_id} not found")
    return item


# ── Writes ──────────────────────────────────────────────────────────────


def add_item(
    db: Session,
    store,
    session_id: str,
    product_id: str,
    quantity: int,
    selected_color: str | None = None,
    selected_size: str | None = None,
    branding_method_id: str | None = None,
    branding_colors: int = 1,
    custom_branding: str | None = None,
) -> CartItem:
    """Add a product to the session cart, pricing it from the catalog."""
    product = store.get_product(product_id)
    if product is None:
        raise NotFoundError(f"Product {product_id} not found")

    item = CartItem(
        session_id=session_id,
        product_id=product_id,
        quantity=quantity,
        selected_color=selected_color,
        selected_size=selected_size,
        branding_method_id=branding_method_id,
        branding_colors=branding_colors,
        custom_branding=custom_branding,
        unit_price=product.base_price,
        branding_cost=_branding_cost_per_unit(store, branding_method_id, quantity, branding_colors),
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    log.info("Cart %s: added %d × %s", session_id[:8], quantity, product_id)
    return item


def update_item(db: Session, store, session_id: str, item_id: str, **changes) -> CartItem:
    """Apply the non-None fields in changes to one cart item."""
    item = _get_owned_item(db, session_id, item_id)
    applied = {k: v for k, v in changes.items() if v is not None}
    for field, value in applied.items():
        setattr(item, field, value)
    if applied.keys() & {"quantity", "branding_method_id", "branding_colors"}:
        item.branding_cost = _branding_cost_per_unit(
            store, item.branding_method_id, item.quantity, item.branding_colors or 1
        )
    db.commit()
    db.refresh(item)
    return item


def remove_item(db: Session, session_id: str, item_id: str) -> None:
    item = _get_owned_item(db, session_id, item_id)
    db.delete(item)
    db.commit()


def clear_cart(db: Session, session_id: str, commit: bool = True) -> int:
    """Delete every item in the session cart. Returns how many were removed."""
    removed = (
        db.query(CartItem)
        .filter(CartItem.session_id == session_id)
        .delete(synchronize_session=False)
    )
    if commit:
        db.commit()
    return removed
