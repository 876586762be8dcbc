"""Store facade and backend selection.

App code talks to a store through four calls: products, purchase, updates and
current_entitlements. PreviewStore answers them from fixtures. select_store()
picks the preview store or a production store at startup based on
preview.backend, so fixture code never has to be imported by shipped builds.
"""

from collections.abc import AsyncIterator
from typing import Callable, Iterable, Optional, Protocol

from iap_preview.config import Config, get_config
from iap_preview.logging_config import get_logger
from iap_preview.models import Product, PurchaseResult, StoreBackendName, VerificationResult
from iap_preview.repositories.product_catalog import ProductCatalog, get_product_catalog
from iap_preview.services.purchase_manager import PurchaseManager, get_purchase_manager
from iap_preview.services.transaction_feed import TransactionFeed, get_transaction_feed

logger = get_logger(__name__)


class StoreBackendError(Exception):
    """Raised when no store backend can be selected."""

    pass


class StoreBackend(Protocol):
    """Call surface shared by the preview store and a production store."""

    def products(self, identifiers: Iterable[str]) -> list[Product]: ...

    async def purchase(self, product: Product, options: Iterable = ()) -> PurchaseResult: ...

    def updates(self) -> AsyncIterator[VerificationResult]: ...

    def current_entitlements(self) -> AsyncIterator[VerificationResult]: ...


class PreviewStore:
    """Fixture-backed store for previews and development."""

    def __init__(
        self,
        catalog: Optional[ProductCatalog] = None,
        purchase_manager: Optional[PurchaseManager] = None,
        feed: Optional[TransactionFeed] = None,
    ):
        self.catalog = catalog if catalog is not None else get_product_catalog()
        self.purchase_manager = (
            purchase_manager if purchase_manager is not None else get_purchase_manager()
        )
        self.feed = feed if feed is not None else get_transaction_feed()

    def products(self, identifiers: Iterable[str] = ()) -> list[Product]:
        return self.catalog.products(identifiers)

    async def purchase(self, product: Product, options: Iterable = ()) -> PurchaseResult:
        return await self.purchase_manager.purchase(product, options)

    def updates(self) -> AsyncIterator[VerificationResult]:
        return self.feed.updates()

    def current_entitlements(self) -> AsyncIterator[VerificationResult]:
        return self.feed.current_entitlements()


def select_store(
    config: Optional[Config] = None,
    production_factory: Optional[Callable[[], StoreBackend]] = None,
) -> StoreBackend:
    """Pick the store backend named by preview.backend.

    Args:
        config: Configuration instance (uses global if not provided)
        production_factory: Builds the production store; required when the
            production backend is configured

    Raises:
        StoreBackendError: If production is configured without a factory
    """
    config = config or get_config()
    backend = config.preview_settings.backend

    if backend == StoreBackendName.PRODUCTION:
        if production_factory is None:
            raise StoreBackendError(
                "preview.backend is 'production' but no production store factory was given"
            )
        logger.info("store_selected", backend=backend.value)
        return production_factory()

    logger.info("store_selected", backend=backend.value)
    return PreviewStore()
