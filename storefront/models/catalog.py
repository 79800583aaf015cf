"""Catalog models — local mirror of the vendor's products, categories and branding methods."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, Index, Integer, String, Text

from ..database import UTCDateTime
from .base import Base


class Product(Base):
    """Replaced wholesale on every products sync."""

    __tablename__ = "products"
    id = Column(String(100), primary_key=True)
    name = Column(Text, nullable=False, default="")
    description = Column(Text, default="")
    base_price = Column(String(20), nullable=False, default="0.00")
    category = Column(String(255), nullable=False, default="Uncategorized")
    brand = Column(String(255))
    images = Column(JSON, default=list)
    colors = Column(JSON, default=list)
    sizes = Column(JSON, default=list)
    stock_count = Column(Integer, default=0)
    branding_options = Column(JSON, default=list)
    specifications = Column(JSON, default=dict)
    minimum_order = Column(Integer, default=1)
    is_active = Column(Boolean, default=True, nullable=False)
    last_updated = Column(UTCDateTime, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_products_category", "category"),
        Index("ix_products_brand", "brand"),
    )


class Category(Base):
    """Additive: never cleared by a sync, so vendor-removed rows persist."""

    __tablename__ = "categories"
    id = Column(String(100), primary_key=True)
    name = Column(String(255), nullable=False, default="")
    description = Column(Text, default="")
    image_url = Column(String(500))
    parent_id = Column(String(100))
    sort_order = Column(Integer, default=0)


class BrandingMethod(Base):
    __tablename__ = "branding_methods"
    id = Column(String(100), primary_key=True)
    name = Column(String(255), nullable=False, default="")
    description = Column(Text, default="")
    base_cost = Column(String(20), nullable=False, default="0.00")
    color_upcharge = Column(String(20), default="0.00")
    setup_fee = Column(String(20), default="0.00")
    minimum_quantity = Column(Integer, default=1)
