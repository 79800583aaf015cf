"""
schemas/orders.py — Pydantic models for branding calculator, cart and quote endpoints

Business Rules:
- Quantities and branding color counts are at least 1
- Customer name and email must not be blank; email must contain "@"
- A quote request needs at least one line item

Called by: routers/catalog.py, routers/cart.py, routers/quotes.py
Depends on: pydantic
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from ..utils import MAX_MONEY

MAX_QUANTITY = 100_000
MAX_BRANDING_COLORS = 20


class BrandingCalculateRequest(BaseModel):
    product_id: str
    branding_method_id: str
    quantity: int = Field(ge=1, le=MAX_QUANTITY)
    colors: int = Field(default=1, ge=1, le=MAX_BRANDING_COLORS)


class BrandingCalculateResponse(BaseModel):
    product_cost: float
    branding_cost: float
    setup_fee: float
    subtotal: float
    tax: float
    total: float
    per_unit: float


class CartItemCreate(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, le=MAX_QUANTITY)
    selected_color: str | None = None
    selected_size: str | None = None
    branding_method_id: str | None = None
    branding_colors: int = Field(default=1, ge=1, le=MAX_BRANDING_COLORS)
    custom_branding: str | None = None


class CartItemUpdate(BaseModel):
    quantity: int | None = Field(default=None, ge=1, le=MAX_QUANTITY)
    selected_color: str | None = None
    selected_size: str | None = None
    branding_method_id: str | None = None
    branding_colors: int | None = Field(default=None, ge=1, le=MAX_BRANDING_COLORS)
    custom_branding: str | None = None


class QuoteCustomer(BaseModel):
    customer_name: str
    customer_email: str
    customer_phone: str | None = None
    company_name: str | None = None
    notes: str | None = None

    @field_validator("customer_name", "customer_email")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field must not be blank")
        return v

    @field_validator("customer_email")
    @classmethod
    def looks_like_email(cls, v: str) -> str:
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v.lower()


class QuoteRequestCreate(QuoteCustomer):
    items: list[dict] = Field(min_length=1)
    total_amount: Decimal = Field(ge=0, le=MAX_MONEY)
