"""
quote_service.py — Quote requests (no payment processing)

A quote request captures customer details, the requested line items and a
tax-inclusive total. It is either posted directly or built from the
session cart.

Business Rules:
- New quote requests start in status "pending"
- From-cart total = cart total × (1 + tax_rate), rounded to cents
- Building from an empty cart is rejected (ValueError)
- The session cart is cleared once the quote request is stored

Called by: routers/quotes.py
Depends on: models/orders.py, services/cart_service.py
"""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from ..models import QuoteRequest
from ..utils import safe_decimal, to_money
from . import NotFoundError
from .cart_service import cart_total, clear_cart, get_cart, item_to_dict

log = logging.getLogger(__name__)


def quote_to_dict(quote: QuoteRequest) -> dict:
    return {
        "id": quote.id,
        "customer_name": quote.customer_name,
        "customer_email": quote.customer_email,
        "customer_phone": quote.customer_phone,
        "company_name": quote.company_name,
        "items": quote.items or [],
        "total_amount": quote.total_amount,
        "notes": quote.notes,
        "status": quote.status,
        "created_at": quote.created_at.isoformat() if quote.created_at else None,
    }


def create_quote(
    db: Session,
    customer_name: str,
    customer_email: str,
    items: list[dict],
    total_amount,
    customer_phone: str | None = None,
    company_name: str | None = None,
    notes: str | None = None,
    commit: bool = True,
) -> QuoteRequest:
    """Store a pending quote request. With commit=False the caller owns the transaction."""
    quote = QuoteRequest(
        customer_name=customer_name,
        customer_email=customer_email,
        customer_phone=customer_phone,
        company_name=company_name,
        items=items,
        total_amount=to_money(total_amount),
        notes=notes,
        status="pending",
    )
    db.add(quote)
    if not commit:
        db.flush()
        return quote
    db.commit()
    db.refresh(quote)
    log.info("Quote request %s created for %s (%s)", quote.id, customer_email, quote.total_amount)
    return quote


def create_quote_from_cart(db: Session, session_id: str, tax_rate, **customer) -> QuoteRequest:
    """Turn the session cart into a quote request, then empty the cart."""
    items = get_cart(db, session_id)
    if not items:
        raise ValueError("Cart is empty")
    total = cart_total(db, session_id) * (Decimal("1") + safe_decimal(tax_rate))
    quote = create_quote(
        db,
        items=[item_to_dict(i) for i in items],
        total_amount=total,
        commit=False,
        **customer,
    )
    try:
        clear_cart(db, session_id, commit=False)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(quote)
    log.info("Quote request %s created from cart for %s (%s)", quote.id, quote.customer_email, quote.total_amount)
    return quote


def get_quote(db: Session, quote_id: str) -> QuoteRequest:
    quote = db.get(QuoteRequest, quote_id)
    if quote is None:
        raise NotFoundError(f"Quote request {quote_id} not found")
    return quote


def list_quotes(db: Session, limit: int = 50, offset: int = 0) -> list[QuoteRequest]:
    return (
        db.query(QuoteRequest)
        .order_by(QuoteRequest.created_at.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


def count_quotes(db: Session) -> int:
    return db.query(QuoteRequest).count()
