"""Configuration models for the fixture file (products.yaml)."""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from iap_preview.models.product import Product, ProductType, SubscriptionInfo, SubscriptionPeriod
from iap_preview.utils.period import validate_iso8601_period


class ProductDefinition(BaseModel):
    """Catalog entry as written in products.yaml."""

    id: str = Field(..., description="Product identifier")
    type: ProductType = Field(default=ProductType.AUTO_RENEWABLE, description="Product kind")
    display_name: str = Field(..., description="Localized display name")
    description: str = Field(..., description="Localized description")
    price: Decimal = Field(..., ge=0, description="Price in local currency, quoted for exactness")
    display_price: str = Field(..., description="Formatted price string")
    is_family_shareable: bool = Field(default=False)
    subscription_period: Optional[str] = Field(
        None, description="ISO 8601 duration (e.g., P1M, P1Y), auto-renewable only"
    )

    @field_validator("subscription_period")
    @classmethod
    def _check_period(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not validate_iso8601_period(value):
            raise ValueError(f"Invalid subscription period: {value}")
        return value

    @model_validator(mode="after")
    def _check_period_matches_type(self) -> "ProductDefinition":
        is_auto_renewable = self.type == ProductType.AUTO_RENEWABLE
        if is_auto_renewable and self.subscription_period is None:
            raise ValueError(f"Auto-renewable product '{self.id}' requires subscription_period")
        if not is_auto_renewable and self.subscription_period is not None:
            raise ValueError(
                f"Product '{self.id}' of type '{self.type.value}' must not set subscription_period"
            )
        return self

    def to_product(self) -> Product:
        """Build the immutable Product this entry describes."""
        subscription = None
        if self.subscription_period is not None:
            subscription = SubscriptionInfo(
                subscription_period=SubscriptionPeriod.from_iso8601(self.subscription_period)
            )
        return Product(
            id=self.id,
            type=self.type,
            display_name=self.display_name,
            description=self.description,
            price=self.price,
            display_price=self.display_price,
            is_family_shareable=self.is_family_shareable,
            subscription=subscription,
        )

    class Config:
        json_schema_extra = {
            "example": {
                "id": "A",
                "type": "auto_renewable",
                "display_name": "Lite (Monthly)",
                "description": "Up to 50 documents, 1 team member",
                "price": "0.99",
                "display_price": "$0.99",
                "is_family_shareable": False,
                "subscription_period": "P1M",
            }
        }


class TransactionFixtureConfig(BaseModel):
    """Shape of the fixed transaction handed out by the streams."""

    product_id: str = Field(default="Pro.Monthly")
    product_type: ProductType = Field(default=ProductType.AUTO_RENEWABLE)
    purchase_days_ago: int = Field(default=3, ge=0)
    original_purchase_days_ago: int = Field(default=33, ge=0)
    expires_in_days: Optional[int] = Field(default=27, ge=0)

    @model_validator(mode="after")
    def _check_date_order(self) -> "TransactionFixtureConfig":
        if self.original_purchase_days_ago <= self.purchase_days_ago:
            raise ValueError(
                "original_purchase_days_ago must be greater than purchase_days_ago"
            )
        if self.expires_in_days is None:
            if self.product_type == ProductType.AUTO_RENEWABLE:
                raise ValueError("expires_in_days is required for auto-renewable transactions")
        elif self.expires_in_days + self.purchase_days_ago <= 0:
            raise ValueError("Expiration must come after the purchase date")
        return self


class StoreBackendName(str, Enum):
    PREVIEW = "preview"
    PRODUCTION = "production"


class PreviewSettings(BaseModel):
    """Behavior of the preview store."""

    backend: StoreBackendName = Field(default=StoreBackendName.PREVIEW)
    purchase_delay_seconds: float = Field(default=1.0, ge=0)
    filter_by_identifiers: bool = Field(
        default=False, description="Filter the catalog by requested ids instead of returning all"
    )
    transaction: TransactionFixtureConfig = Field(default_factory=TransactionFixtureConfig)


class ProductsConfig(BaseModel):
    """Complete products.yaml configuration."""

    products: list[ProductDefinition] = Field(default_factory=list)
    preview: PreviewSettings = Field(default_factory=PreviewSettings)

    @field_validator("products")
    @classmethod
    def _check_unique_ids(cls, value: list[ProductDefinition]) -> list[ProductDefinition]:
        seen = set()
        for definition in value:
            if definition.id in seen:
                raise ValueError(f"Duplicate product id: {definition.id}")
            seen.add(definition.id)
        return value
