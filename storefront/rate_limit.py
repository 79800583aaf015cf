"""Shared rate limiter (in-memory storage, keyed on client address).

Routers decorate endpoints with @limiter.limit(...); the app installs the
limiter on app.state and registers slowapi's 429 handler.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit_default],
    enabled=settings.rate_limit_enabled,
)
