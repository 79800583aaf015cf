"""Database models — re-exports all models.

Import from here:  from storefront.models import Product, SyncLog, ...
Or from submodules: from storefront.models.catalog import Product
"""

from .base import Base  # noqa: F401

# Catalog mirror
from .catalog import BrandingMethod, Category, Product  # noqa: F401

# Sync
from .sync import SyncLog  # noqa: F401

# Cart & Quote requests
from .orders import CartItem, QuoteRequest  # noqa: F401
