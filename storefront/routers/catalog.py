"""
routers/catalog.py — Catalog read API and branding cost calculator

Endpoints:
- GET  /api/products             filter by category, brand, search; page/limit
- GET  /api/products/{id}
- GET  /api/categories
- GET  /api/branding-methods
- POST /api/branding/calculate

Business Rules:
- Reads only; the catalog is written by the sync scheduler
- has_more = page × limit < total

Called by: main.py (router mount)
Depends on: catalog_store, services/pricing
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from ..catalog_store import CatalogStore
from ..config import settings
from ..dependencies import get_catalog_store
from ..schemas.catalog import BrandingMethodRecord, CategoryRecord, ProductListResponse, ProductRecord
from ..schemas.orders import BrandingCalculateRequest, BrandingCalculateResponse
from ..services import NotFoundError
from ..services.pricing import quote_branding

router = APIRouter(tags=["catalog"])


@router.get("/api/products", response_model=ProductListResponse)
async def list_products(
    category: str | None = None,
    brand: str | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=200),
    store: CatalogStore = Depends(get_catalog_store),
):
    matches = store.list_products(category=category, brand=brand, search=search)
    start = (page - 1) * limit
    return ProductListResponse(
        products=matches[start : start + limit],
        total=len(matches),
        page=page,
        limit=limit,
        has_more=page * limit < len(matches),
    )


@router.get("/api/products/{product_id}", response_model=ProductRecord)
async def get_product(product_id: str, store: CatalogStore = Depends(get_catalog_store)):
    product = store.get_product(product_id)
    if not product:
        raise HTTPException(404, "Product not found")
    return product


@router.get("/api/categories", response_model=list[CategoryRecord])
async def list_categories(store: CatalogStore = Depends(get_catalog_store)):
    return store.list_categories()


@router.get("/api/branding-methods", response_model=list[BrandingMethodRecord])
async def list_branding_methods(store: CatalogStore = Depends(get_catalog_store)):
    return store.list_branding_methods()


@router.post("/api/branding/calculate", response_model=BrandingCalculateResponse)
async def calculate_branding(
    payload: BrandingCalculateRequest,
    store: CatalogStore = Depends(get_catalog_store),
):
    try:
        cost = quote_branding(
            store,
            payload.product_id,
            payload.branding_method_id,
            payload.quantity,
            colors=payload.colors,
            tax_rate=settings.tax_rate,
        )
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    return cost.as_dict()
