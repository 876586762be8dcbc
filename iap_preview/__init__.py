"""Fake, deterministic in-app purchase fixtures for UI previews.

    >>> import asyncio
    >>> import iap_preview
    >>> catalog = iap_preview.products(["C"])
    >>> result = asyncio.run(iap_preview.purchase(catalog[0]))
    >>> result.is_pending
    True
"""

from typing import Iterable

from iap_preview.models import Product, PurchaseResult, Transaction, VerificationResult
from iap_preview.repositories.product_catalog import get_product_catalog
from iap_preview.services.purchase_manager import get_purchase_manager
from iap_preview.services.store import PreviewStore, select_store
from iap_preview.services.transaction_feed import current_entitlements, updates

__version__ = "0.1.0"


def products(identifiers: Iterable[str] = ()) -> list[Product]:
    """Query the global preview catalog."""
    return get_product_catalog().products(identifiers)


async def purchase(product: Product, options: Iterable = ()) -> PurchaseResult:
    """Buy a product from the global preview store."""
    return await get_purchase_manager().purchase(product, options)


__all__ = [
    "Product",
    "PurchaseResult",
    "Transaction",
    "VerificationResult",
    "PreviewStore",
    "select_store",
    "products",
    "purchase",
    "updates",
    "current_entitlements",
]
