"""Shared HTTP client — connection pooling for outbound vendor requests.

One module-level httpx.AsyncClient instance:
  - http: no redirects, vendor timeout from settings, connection pooling

Per-request timeout overrides via http.get(url, timeout=15).

Usage:
    from storefront.http_client import http
    resp = await http.post(url, json=payload)
"""

import httpx

from .config import settings

_LIMITS = httpx.Limits(
    max_connections=20,
    max_keepalive_connections=10,
    keepalive_expiry=30,
)

http = httpx.AsyncClient(
    timeout=settings.vendor_timeout_seconds,
    limits=_LIMITS,
    follow_redirects=False,
)


async def close_clients():
    """Shut down the shared client. Call from app lifespan shutdown."""
    try:
        await http.aclose()
    except RuntimeError:
        pass
