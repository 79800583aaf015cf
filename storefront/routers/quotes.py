"""
routers/quotes.py — Quote request API

Endpoints:
- POST /api/quotes             create from explicit line items
- POST /api/quotes/from-cart   create from the session cart (cart is emptied)
- GET  /api/quotes             list, newest first
- GET  /api/quotes/{quote_id}

Called by: main.py (router mount)
Depends on: services/quote_service, dependencies (cart session id)
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..dependencies import cart_session_id
from ..schemas.orders import QuoteCustomer, QuoteRequestCreate
from ..services import NotFoundError
from ..services import quote_service

router = APIRouter(tags=["quotes"])


@router.post("/api/quotes", status_code=201)
async def create_quote(payload: QuoteRequestCreate, db: Session = Depends(get_db)):
    quote = quote_service.create_quote(db, **payload.model_dump())
    return quote_service.quote_to_dict(quote)


@router.post("/api/quotes/from-cart", status_code=201)
async def create_quote_from_cart(
    payload: QuoteCustomer,
    session_id: str = Depends(cart_session_id),
    db: Session = Depends(get_db),
):
    try:
        quote = quote_service.create_quote_from_cart(
            db, session_id, settings.tax_rate, **payload.model_dump()
        )
    except ValueError as e:
        raise HTTPException(400, str(e))
    logger.info("Quote request {} built from cart {}", quote.id, session_id[:8])
    return quote_service.quote_to_dict(quote)


@router.get("/api/quotes")
async def list_quotes(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    quotes = quote_service.list_quotes(db, limit=limit, offset=offset)
    return {
        "quotes": [quote_service.quote_to_dict(q) for q in quotes],
        "total": quote_service.count_quotes(db),
        "limit": limit,
        "offset": offset,
    }


@router.get("/api/quotes/{quote_id}")
async def get_quote(quote_id: str, db: Session = Depends(get_db)):
    try:
        quote = quote_service.get_quote(db, quote_id)
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    return quote_service.quote_to_dict(quote)
