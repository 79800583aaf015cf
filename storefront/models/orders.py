"""Cart and quote request models — session carts and the quote requests built from them."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, Index, Integer, String, Text

from ..database import UTCDateTime
from .base import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class CartItem(Base):
    __tablename__ = "cart_items"
    id = Column(String(36), primary_key=True, default=_uuid)
    session_id = Column(String(64), nullable=False)
    product_id = Column(String(100), nullable=False)
    quantity = Column(Integer, nullable=False)
    selected_color = Column(String(100))
    selected_size = Column(String(50))
    branding_method_id = Column(String(100))
    branding_colors = Column(Integer, default=1)
    custom_branding = Column(Text)
    unit_price = Column(String(20), nullable=False)
    branding_cost = Column(String(20), default="0.00")
    created_at = Column(UTCDateTime, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (Index("ix_cart_session", "session_id"),)


class QuoteRequest(Base):
    __tablename__ = "quote_requests"
    id = Column(String(36), primary_key=True, default=_uuid)
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(50))
    company_name = Column(String(255))
    items = Column(JSON, nullable=False, default=list)
    total_amount = Column(String(20), nullable=False)
    notes = Column(Text)
    status = Column(String(20), default="pending")
    created_at = Column(UTCDateTime, default=lambda: datetime.now(timezone.utc))
