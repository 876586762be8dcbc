"""Pydantic models for products, transactions, purchases and configuration."""

from .product import (
    Product,
    ProductType,
    SubscriptionInfo,
    SubscriptionPeriod,
    SubscriptionPeriodUnit,
)

from .transaction import (
    RevocationReason,
    Transaction,
    VerificationError,
    VerificationResult,
    VerificationStatus,
)

from .purchase import (
    AppAccountTokenOption,
    CustomOption,
    PurchaseOption,
    PurchaseOptionError,
    PurchaseOutcome,
    PurchaseResult,
    QuantityOption,
    SimulatesAskToBuyOption,
    parse_purchase_options,
)

from .config import (
    PreviewSettings,
    ProductDefinition,
    ProductsConfig,
    StoreBackendName,
    TransactionFixtureConfig,
)

__all__ = [
    # Products
    "Product",
    "ProductType",
    "SubscriptionInfo",
    "SubscriptionPeriod",
    "SubscriptionPeriodUnit",
    # Transactions
    "RevocationReason",
    "Transaction",
    "VerificationError",
    "VerificationResult",
    "VerificationStatus",
    # Purchases
    "AppAccountTokenOption",
    "CustomOption",
    "PurchaseOption",
    "PurchaseOptionError",
    "PurchaseOutcome",
    "PurchaseResult",
    "QuantityOption",
    "SimulatesAskToBuyOption",
    "parse_purchase_options",
    # Configuration
    "PreviewSettings",
    "ProductDefinition",
    "ProductsConfig",
    "StoreBackendName",
    "TransactionFixtureConfig",
]
