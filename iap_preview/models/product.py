"""Product models mirroring the platform's StoreKit product type.

These are plain immutable values; nothing here talks to a store.
"""

from datetime import timedelta
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from iap_preview.utils.period import format_iso8601_period, parse_iso8601_period, period_to_timedelta


class ProductType(str, Enum):
    """Kind of purchasable product."""

    CONSUMABLE = "consumable"
    NON_CONSUMABLE = "non_consumable"
    AUTO_RENEWABLE = "auto_renewable"
    NON_RENEWABLE = "non_renewable"


class SubscriptionPeriodUnit(str, Enum):
    """Unit of time a subscription period is measured in."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @property
    def letter(self) -> str:
        """ISO 8601 designator for this unit (D, W, M, Y)."""
        return self.value[0].upper()

    @classmethod
    def from_letter(cls, letter: str) -> "SubscriptionPeriodUnit":
        for unit in cls:
            if unit.letter == letter.upper():
                return unit
        raise ValueError(f"Unsupported unit: {letter}")


class SubscriptionPeriod(BaseModel):
    """Recurrence cadence of an auto-renewable subscription."""

    unit: SubscriptionPeriodUnit = Field(..., description="Unit of time the period represents")
    value: int = Field(..., ge=1, description="Number of units in the period")

    @classmethod
    def from_iso8601(cls, period: str) -> "SubscriptionPeriod":
        """Build a period from an ISO 8601 duration such as "P1M".

        Raises:
            ValueError: If the duration is malformed
        """
        count, letter = parse_iso8601_period(period)
        return cls(unit=SubscriptionPeriodUnit.from_letter(letter), value=count)

    def to_iso8601(self) -> str:
        return format_iso8601_period(self.value, self.unit.letter)

    def to_timedelta(self) -> timedelta:
        """Approximate length (months are 30 days, years 365)."""
        return period_to_timedelta(self.to_iso8601())

    class Config:
        frozen = True
        json_schema_extra = {"example": {"unit": "month", "value": 1}}


class SubscriptionInfo(BaseModel):
    """Subscription-specific product properties."""

    subscription_period: SubscriptionPeriod = Field(
        ..., description="How long the subscription lasts before auto-renewing"
    )

    class Config:
        frozen = True


class Product(BaseModel):
    """Stand-in for a store product, with the same field set as the real type."""

    id: str = Field(..., min_length=1, description="Unique product identifier")
    type: ProductType = Field(..., description="Kind of product")
    display_name: str = Field(..., description="Localized display name")
    description: str = Field(..., description="Localized description")
    price: Decimal = Field(..., ge=0, description="Price in local currency")
    display_price: str = Field(..., description="Localized, formatted price")
    is_family_shareable: bool = Field(default=False, description="Available for family sharing")
    subscription: Optional[SubscriptionInfo] = Field(
        None, description="Present for auto-renewable subscriptions only"
    )

    @model_validator(mode="after")
    def _check_subscription_info(self) -> "Product":
        is_auto_renewable = self.type == ProductType.AUTO_RENEWABLE
        if is_auto_renewable and self.subscription is None:
            raise ValueError(f"Auto-renewable product '{self.id}' requires subscription info")
        if not is_auto_renewable and self.subscription is not None:
            raise ValueError(
                f"Product '{self.id}' of type '{self.type.value}' must not carry subscription info"
            )
        return self

    @property
    def is_subscription(self) -> bool:
        return self.subscription is not None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "C",
                "type": "auto_renewable",
                "display_name": "Pro (Monthly)",
                "description": "Unlimited documents, up to 5 team members",
                "price": "2.99",
                "display_price": "$2.99",
                "is_family_shareable": False,
                "subscription": {"subscription_period": {"unit": "month", "value": 1}},
            }
        }
