"""All settings, loaded from the .env file."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_url: str = "http://localhost:8000"
    secret_key: str = "change-me"
    database_url: str = "sqlite:///./storefront.db"

    # Catalog storage: "sql" (database_url) or "memory" (process-local)
    catalog_backend: str = "sql"

    # Vendor catalog API
    vendor_api_url: str = "https://vendorapi.amrod.co.za"
    vendor_auth_url: str = "https://identity.amrod.co.za/VendorLogin"
    vendor_username: str = ""
    vendor_password: str = ""
    vendor_customer_code: str = ""
    vendor_token_ttl_minutes: int = 60
    vendor_timeout_seconds: float = 30

    # Catalog sync
    sync_enabled: bool = True
    sync_interval_hours: float = 6
    sync_page_size: int = 100

    # Load the development catalog when no vendor credentials are set
    sample_data_enabled: bool = True

    # Pricing
    tax_rate: float = 0.15

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_default: str = "120/minute"
    rate_limit_sync: str = "5/minute"

    @property
    def vendor_configured(self) -> bool:
        return bool(self.vendor_username and self.vendor_password)

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
