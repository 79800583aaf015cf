"""
routers/cart.py — Session cart API

Endpoints:
- GET    /api/cart            items and total for this session
- POST   /api/cart            add an item
- DELETE /api/cart            empty the cart
- PUT    /api/cart/{item_id}  change quantity, options or branding
- DELETE /api/cart/{item_id}  remove one item

Called by: main.py (router mount)
Depends on: services/cart_service, dependencies (cart session id)
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..catalog_store import CatalogStore
from ..database import get_db
from ..dependencies import cart_session_id, get_catalog_store
from ..schemas.orders import CartItemCreate, CartItemUpdate
from ..services import NotFoundError
from ..services import cart_service
from ..utils import to_money

router = APIRouter(tags=["cart"])


def _cart_payload(db: Session, session_id: str) -> dict:
    items = cart_service.get_cart(db, session_id)
    return {
        "items": [cart_service.item_to_dict(i) for i in items],
        "total": to_money(cart_service.cart_total(db, session_id)),
    }


@router.get("/api/cart")
async def get_cart(session_id: str = Depends(cart_session_id), db: Session = Depends(get_db)):
    return _cart_payload(db, session_id)


@router.post("/api/cart", status_code=201)
async def add_to_cart(
    payload: CartItemCreate,
    session_id: str = Depends(cart_session_id),
    db: Session = Depends(get_db),
    store: CatalogStore = Depends(get_catalog_store),
):
    try:
        item = cart_service.add_item(db, store, session_id, **payload.model_dump())
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    return cart_service.item_to_dict(item)


@router.delete("/api/cart")
async def clear_cart(session_id: str = Depends(cart_session_id), db: Session = Depends(get_db)):
    removed = cart_service.clear_cart(db, session_id)
    return {"ok": True, "removed": removed}


@router.put("/api/cart/{item_id}")
async def update_cart_item(
    item_id: str,
    payload: CartItemUpdate,
    session_id: str = Depends(cart_session_id),
    db: Session = Depends(get_db),
    store: CatalogStore = Depends(get_catalog_store),
):
    try:
        item = cart_service.update_item(db, store, session_id, item_id, **payload.model_dump(exclude_unset=True))
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    return cart_service.item_to_dict(item)


@router.delete("/api/cart/{item_id}")
async def remove_cart_item(
    item_id: str,
    session_id: str = Depends(cart_session_id),
    db: Session = Depends(get_db),
):
    try:
        cart_service.remove_item(db, session_id, item_id)
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    return {"ok": True}
