"""Service layer — pricing, cart and quote request logic shared by the routers."""


class NotFoundError(LookupError):
    """A referenced product, branding method, cart item or quote does not exist."""
