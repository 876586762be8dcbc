"""Read-only data sources for preview fixtures."""

from iap_preview.repositories.product_catalog import (
    ProductCatalog,
    ProductNotFoundError,
    get_product_catalog,
    reset_product_catalog,
)

__all__ = [
    "ProductCatalog",
    "ProductNotFoundError",
    "get_product_catalog",
    "reset_product_catalog",
]
