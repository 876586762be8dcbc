"""Product catalog - the fixed set of preview products.

Built from products.yaml once and then served read-only.
"""

from typing import Iterable, Optional

from iap_preview.config import Config, get_config
from iap_preview.logging_config import get_logger
from iap_preview.models import Product, ProductType

logger = get_logger(__name__)


class ProductNotFoundError(Exception):
    """Raised when a product is not found in the catalog."""

    pass


class ProductCatalog:
    """Ordered, read-only catalog of preview products.

    Unlike a real store, products() ignores the requested identifiers by
    default and always returns the whole catalog, so previews render the
    same screen whatever ids the app asks for. Set
    preview.filter_by_identifiers to get store-like filtering.
    """

    def __init__(self, config: Optional[Config] = None, filter_by_identifiers: Optional[bool] = None):
        """Initialize product catalog.

        Args:
            config: Configuration instance. If not provided, uses global config.
            filter_by_identifiers: Override the configured filtering mode
        """
        self._config = config or get_config()
        self._filter_override = filter_by_identifiers
        self._products: tuple[Product, ...] = ()
        self._products_by_id: dict[str, Product] = {}
        self._load_products()

    def _load_products(self) -> None:
        self._products = tuple(d.to_product() for d in self._config.products.products)
        self._products_by_id = {p.id: p for p in self._products}
        logger.info("catalog_loaded", product_count=len(self._products))

    @property
    def filter_by_identifiers(self) -> bool:
        if self._filter_override is not None:
            return self._filter_override
        return self._config.preview_settings.filter_by_identifiers

    def products(self, identifiers: Iterable[str] = ()) -> list[Product]:
        """Look up products for the given identifiers.

        Never fails. Catalog order is kept whether or not filtering is on,
        and unknown identifiers are dropped when it is.

        Args:
            identifiers: Requested product ids

        Returns:
            List of Product
        """
        requested = list(identifiers)
        if not self.filter_by_identifiers:
            logger.debug("catalog_query_unfiltered", requested=requested)
            return list(self._products)

        wanted = set(requested)
        matched = [p for p in self._products if p.id in wanted]
        logger.debug("catalog_query_filtered", requested=requested, matched=len(matched))
        return matched

    def get_by_id(self, product_id: str) -> Product:
        """Get product by ID.

        Raises:
            ProductNotFoundError: If product ID not found
        """
        product = self._products_by_id.get(product_id)
        if product is None:
            raise ProductNotFoundError(
                f"Product not found: {product_id}. "
                f"Available products: {list(self._products_by_id.keys())}"
            )
        return product

    def find_by_id(self, product_id: str) -> Optional[Product]:
        return self._products_by_id.get(product_id)

    def get_all_product_ids(self) -> list[str]:
        return [p.id for p in self._products]

    def get_products_by_type(self, product_type: ProductType) -> list[Product]:
        return [p for p in self._products if p.type == product_type]

    def reload(self) -> None:
        """Reload products from configuration."""
        self._config.reload()
        self._load_products()

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: str) -> bool:
        return product_id in self._products_by_id

    def __iter__(self):
        return iter(self._products)

    def __repr__(self) -> str:
        return f"ProductCatalog(products={len(self._products)}, filtered={self.filter_by_identifiers})"


# Global catalog instance
_catalog_instance: Optional[ProductCatalog] = None


def get_product_catalog(config: Optional[Config] = None) -> ProductCatalog:
    """Get global product catalog instance (singleton).

    Args:
        config: Optional configuration instance (only used on first call)
    """
    global _catalog_instance
    if _catalog_instance is None:
        _catalog_instance = ProductCatalog(config)
    return _catalog_instance


def reset_product_catalog() -> None:
    global _catalog_instance
    _catalog_instance = None
