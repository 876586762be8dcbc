"""Preview store services: purchases, transaction streams and backend selection."""

from iap_preview.services.purchase_manager import PurchaseManager, get_purchase_manager
from iap_preview.services.store import PreviewStore, StoreBackend, StoreBackendError, select_store
from iap_preview.services.transaction_feed import (
    TransactionFeed,
    build_preview_transaction,
    current_entitlements,
    get_preview_transaction,
    get_transaction_feed,
    updates,
)

__all__ = [
    "PurchaseManager",
    "get_purchase_manager",
    "PreviewStore",
    "StoreBackend",
    "StoreBackendError",
    "select_store",
    "TransactionFeed",
    "build_preview_transaction",
    "current_entitlements",
    "get_preview_transaction",
    "get_transaction_feed",
    "updates",
]
