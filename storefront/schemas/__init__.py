"""
schemas/ — Pydantic records and request/response models for the storefront

Catalog and sync-log records are the shapes the stores accept and return;
request models give input validation and OpenAPI docs for the routers.
"""
