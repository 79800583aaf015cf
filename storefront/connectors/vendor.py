"""
connectors/vendor.py — Vendor catalog API client

Authenticates against the vendor identity endpoint, caches the bearer
token for its lifetime, and exposes typed fetches for products,
categories and branding methods.

Business Rules:
- The cached token is reused only while expires_at > now
- A 401 on a data request invalidates the token, re-authenticates once
  and retries the same request once; no backoff, no further retries
- Products pagination is client-side over one GetAll listing; categories
  and branding methods are never paginated
- Every vendor field is optional; bad values fall back to defaults and
  never fail the whole fetch

Called by: scheduler.py
Depends on: http_client.py, connectors/fields.py, utils
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum

import httpx

from . import fields
from ..utils import first_present, safe_decimal, safe_int

log = logging.getLogger(__name__)


class VendorApiError(Exception):
    """Base error for vendor API failures."""


class AuthenticationError(VendorApiError):
    """Vendor login rejected, unreachable, or returned no token."""


class RequestError(VendorApiError):
    """Data request failed (non-2xx after the credential-refresh retry)."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class ResourceKind(str, Enum):
    PRODUCTS = "products"
    CATEGORIES = "categories"
    BRANDING = "branding"

    @property
    def path(self) -> str:
        return f"/{self.value}/GetAll"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Credential:
    token: str
    expires_at: datetime

    def is_valid(self, now: datetime) -> bool:
        return self.expires_at > now


# ── Vendor shapes ─────────────────────────────────────────────────────


@dataclass
class VendorVariant:
    color: str = ""
    sizes: list[str] = field(default_factory=list)
    stock: int = 0


@dataclass
class VendorBrandingOption:
    method: str = ""
    cost: Decimal = Decimal("0")
    setup_fee: Decimal = Decimal("0")
    minimum_quantity: int = 1


@dataclass
class VendorProduct:
    id: str
    name: str = ""
    description: str = ""
    price: Decimal = Decimal("0")
    category: str = "Uncategorized"
    brand: str = ""
    images: list[str] = field(default_factory=list)
    variants: list[VendorVariant] = field(default_factory=list)
    branding_options: list[VendorBrandingOption] = field(default_factory=list)
    specifications: dict = field(default_factory=dict)
    minimum_order: int = 1


@dataclass
class VendorCategory:
    id: str
    name: str = ""
    description: str = ""
    parent_id: str | None = None
    image_url: str | None = None
    sort_order: int = 0


@dataclass
class VendorBrandingMethod:
    id: str
    name: str = ""
    description: str = ""
    base_cost: Decimal = Decimal("0")
    color_upcharge: Decimal = Decimal("0")
    setup_fee: Decimal = Decimal("0")
    minimum_quantity: int = 1


@dataclass
class ProductPage:
    items: list[VendorProduct]
    total: int
    has_more: bool


# ── Payload parsing ───────────────────────────────────────────────────


def _text(v, default: str = "") -> str:
    if v is None or isinstance(v, (dict, list)):
        return default
    return str(v).strip()


def _text_list(v) -> list[str]:
    if isinstance(v, str):
        v = [v]
    if not isinstance(v, list):
        return []
    return [s for s in (_text(x) for x in v) if s]


def _as_listing(payload) -> list:
    """Unwrap a GetAll payload into a list of raw items."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        inner = first_present(payload, fields.LISTING_WRAPPERS)
        if isinstance(inner, list):
            return inner
    return []


def _parse_variant(item) -> VendorVariant:
    f = fields.VARIANT
    return VendorVariant(
        color=_text(first_present(item, f["color"])),
        sizes=_text_list(first_present(item, f["sizes"])),
        stock=safe_int(first_present(item, f["stock"]), 0),
    )


def _parse_branding_option(item) -> VendorBrandingOption:
    f = fields.BRANDING_OPTION
    return VendorBrandingOption(
        method=_text(first_present(item, f["method"])),
        cost=safe_decimal(first_present(item, f["cost"])),
        setup_fee=safe_decimal(first_present(item, f["setup_fee"])),
        minimum_quantity=safe_int(first_present(item, f["minimum_quantity"], "1"), 0),
    )


def parse_product(item) -> VendorProduct | None:
    """Map one raw product; returns None when the item has no identifier."""
    if not isinstance(item, dict):
        log.warning("Vendor product skipped: expected object, got %s", type(item).__name__)
        return None
    f = fields.PRODUCT
    pid = _text(first_present(item, f["id"]))
    if not pid:
        log.warning("Vendor product skipped: no identifier (keys: %s)", list(item.keys())[:10])
        return None

    images = _text_list(first_present(item, f["images"]))
    if not images:
        images = _text_list(first_present(item, f["image"]))

    variants = first_present(item, f["variants"], [])
    options = first_present(item, f["branding_options"], [])
    specs = first_present(item, f["specifications"], {})

    return VendorProduct(
        id=pid,
        name=_text(first_present(item, f["name"])),
        description=_text(first_present(item, f["description"])),
        price=safe_decimal(first_present(item, f["price"], "0")),
        category=_text(first_present(item, f["category"]), "Uncategorized") or "Uncategorized",
        brand=_text(first_present(item, f["brand"])),
        images=images,
        variants=[_parse_variant(v) for v in variants if isinstance(v, dict)]
        if isinstance(variants, list) else [],
        branding_options=[_parse_branding_option(o) for o in options if isinstance(o, dict)]
        if isinstance(options, list) else [],
        specifications=specs if isinstance(specs, dict) else {},
        minimum_order=safe_int(first_present(item, f["minimum_order"], "1"), 0),
    )


def parse_category(item) -> VendorCategory | None:
    if not isinstance(item, dict):
        log.warning("Vendor category skipped: expected object, got %s", type(item).__name__)
        return None
    f = fields.CATEGORY
    cid = _text(first_present(item, f["id"]))
    if not cid:
        log.warning("Vendor category skipped: no identifier")
        return None
    return VendorCategory(
        id=cid,
        name=_text(first_present(item, f["name"])),
        description=_text(first_present(item, f["description"])),
        parent_id=_text(first_present(item, f["parent_id"])) or None,
        image_url=_text(first_present(item, f["image_url"])) or None,
        sort_order=safe_int(first_present(item, f["sort_order"]), 0),
    )


def parse_branding_method(item) -> VendorBrandingMethod | None:
    if not isinstance(item, dict):
        log.warning("Vendor branding method skipped: expected object, got %s", type(item).__name__)
        return None
    f = fields.BRANDING_METHOD
    mid = _text(first_present(item, f["id"]))
    if not mid:
        log.warning("Vendor branding method skipped: no identifier")
        return None
    return VendorBrandingMethod(
        id=mid,
        name=_text(first_present(item, f["name"])),
        description=_text(first_present(item, f["description"])),
        base_cost=safe_decimal(first_present(item, f["base_cost"], "0")),
        color_upcharge=safe_decimal(first_present(item, f["color_upcharge"], "0")),
        setup_fee=safe_decimal(first_present(item, f["setup_fee"], "0")),
        minimum_quantity=safe_int(first_present(item, f["minimum_quantity"], "1"), 0),
    )


# ── Client ────────────────────────────────────────────────────────────


class VendorClient:
    """Vendor catalog API — bearer token from a JSON login endpoint."""

    def __init__(
        self,
        base_url: str,
        auth_url: str,
        username: str,
        password: str,
        customer_code: str = "",
        token_ttl: timedelta = timedelta(hours=1),
        client: httpx.AsyncClient | None = None,
        clock=None,
    ):
        self.base_url = base_url.rstrip("/")
        self.auth_url = auth_url
        self.username = username
        self.password = password
        self.customer_code = customer_code
        self.token_ttl = token_ttl
        self._client = client
        self._clock = clock or _utcnow
        self._credential: Credential | None = None
        self._listings: dict[ResourceKind, list] = {}

    @classmethod
    def from_settings(cls, settings=None, client: httpx.AsyncClient | None = None):
        if settings is None:
            from ..config import settings
        return cls(
            base_url=settings.vendor_api_url,
            auth_url=settings.vendor_auth_url,
            username=settings.vendor_username,
            password=settings.vendor_password,
            customer_code=settings.vendor_customer_code,
            token_ttl=timedelta(minutes=settings.vendor_token_ttl_minutes),
            client=client,
        )

    @property
    def http(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        from ..http_client import http

        return http

    @property
    def credential(self) -> Credential | None:
        return self._credential

    async def authenticate(self) -> Credential:
        now = self._clock()
        if self._credential and self._credential.is_valid(now):
            return self._credential

        try:
            r = await self.http.post(
                self.auth_url,
                json={
                    "UserName": self.username,
                    "Password": self.password,
                    "CustomerCode": self.customer_code,
                },
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            raise AuthenticationError(f"Vendor login failed: {e}") from e

        if not r.is_success:
            raise AuthenticationError(f"Vendor login failed: HTTP {r.status_code}")
        try:
            body = r.json()
        except ValueError as e:
            raise AuthenticationError("Vendor login returned a non-JSON body") from e

        token = first_present(body, fields.AUTH_TOKEN)
        if not isinstance(token, str) or not token:
            raise AuthenticationError("No access token received from vendor login")

        self._credential = Credential(token=token, expires_at=now + self.token_ttl)
        log.info(
            "Vendor login ok for %s, token valid until %s",
            self.username,
            self._credential.expires_at.isoformat(),
        )
        return self._credential

    def invalidate(self) -> None:
        self._credential = None

    async def _send(self, path: str, token: str) -> httpx.Response:
        try:
            return await self.http.get(
                f"{self.base_url}{path}",
                headers={
                    "Authorization": f"Bearer {token}",
                    "Content-Type": "application/json",
                },
            )
        except httpx.HTTPError as e:
            raise RequestError(f"Vendor request {path} failed: {e}") from e

    async def get_json(self, path: str):
        """Authorized GET with one credential refresh on 401."""
        credential = await self.authenticate()
        r = await self._send(path, credential.token)

        if r.status_code == 401:
            log.info("Vendor returned 401 for %s, re-authenticating", path)
            self.invalidate()
            credential = await self.authenticate()
            r = await self._send(path, credential.token)

        if not r.is_success:
            raise RequestError(f"Vendor API error: HTTP {r.status_code} for {path}", r.status_code)
        try:
            return r.json()
        except ValueError as e:
            raise RequestError(f"Vendor API returned a non-JSON body for {path}", r.status_code) from e

    async def fetch_listing(self, kind: ResourceKind) -> list:
        """Request the full GetAll listing for a resource kind and cache it."""
        items = _as_listing(await self.get_json(kind.path))
        self._listings[kind] = items
        log.info("Vendor %s listing: %d items", kind.value, len(items))
        return items

    async def fetch_paged(
        self, kind: ResourceKind, page: int = 1, page_size: int = 100
    ) -> tuple[list, bool]:
        """Slice the cached listing; page 1 always refreshes it."""
        if page < 1 or page_size < 1:
            raise ValueError("page and page_size must be >= 1")
        if page == 1 or kind not in self._listings:
            await self.fetch_listing(kind)
        items = self._listings[kind]
        start = (page - 1) * page_size
        end = start + page_size
        return items[start:end], end < len(items)

    async def fetch_products(self, page: int = 1, page_size: int = 100) -> ProductPage:
        raw, has_more = await self.fetch_paged(ResourceKind.PRODUCTS, page, page_size)
        items = [p for p in (parse_product(i) for i in raw) if p is not None]
        return ProductPage(
            items=items,
            total=len(self._listings[ResourceKind.PRODUCTS]),
            has_more=has_more,
        )

    async def fetch_categories(self) -> list[VendorCategory]:
        raw = await self.fetch_listing(ResourceKind.CATEGORIES)
        return [c for c in (parse_category(i) for i in raw) if c is not None]

    async def fetch_branding_methods(self) -> list[VendorBrandingMethod]:
        raw = await self.fetch_listing(ResourceKind.BRANDING)
        return [m for m in (parse_branding_method(i) for i in raw) if m is not None]
