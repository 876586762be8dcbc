"""Purchase options and purchase results."""

from enum import Enum
from typing import Annotated, Iterable, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, model_validator

from iap_preview.models.transaction import VerificationResult


class PurchaseOptionError(ValueError):
    """Raised when purchase options cannot be parsed."""

    pass


class AppAccountTokenOption(BaseModel):
    """Associates the purchase with an account in the app's own system."""

    kind: Literal["app_account_token"] = "app_account_token"
    token: UUID

    class Config:
        frozen = True


class QuantityOption(BaseModel):
    """Number of items to buy (consumables only on a real store)."""

    kind: Literal["quantity"] = "quantity"
    quantity: int = Field(..., ge=1)

    class Config:
        frozen = True


class SimulatesAskToBuyOption(BaseModel):
    """Sandbox flag that makes the purchase wait for a parent's approval."""

    kind: Literal["simulates_ask_to_buy_in_sandbox"] = "simulates_ask_to_buy_in_sandbox"
    enabled: bool = True

    class Config:
        frozen = True


class CustomOption(BaseModel):
    """Arbitrary key/value passed through to the store."""

    kind: Literal["custom"] = "custom"
    key: str = Field(..., min_length=1)
    value: Union[bool, int, float, str]

    class Config:
        frozen = True


PurchaseOption = Annotated[
    Union[AppAccountTokenOption, QuantityOption, SimulatesAskToBuyOption, CustomOption],
    Field(discriminator="kind"),
]

_options_adapter = TypeAdapter(list[PurchaseOption])


def parse_purchase_options(raw: Iterable[dict]) -> frozenset:
    """Validate raw option dicts into a set of purchase options.

    Args:
        raw: Option dicts, each with a "kind" key

    Returns:
        frozenset of option models

    Raises:
        PurchaseOptionError: If any option is malformed
    """
    try:
        return frozenset(_options_adapter.validate_python(list(raw)))
    except ValidationError as e:
        raise PurchaseOptionError(f"Invalid purchase options:\n{e}") from e


class PurchaseOutcome(str, Enum):
    """How a purchase attempt ended."""

    SUCCESS = "success"  # Completed, transaction attached
    USER_CANCELLED = "user_cancelled"  # User dismissed the sheet
    PENDING = "pending"  # Waiting on outside action, e.g. Ask to Buy


class PurchaseResult(BaseModel):
    """Outcome of a purchase attempt.

    Only SUCCESS carries a verification result. A PENDING purchase may still
    complete later, in which case its transaction arrives on the updates
    stream.
    """

    outcome: PurchaseOutcome
    verification: Optional[VerificationResult] = None

    @model_validator(mode="after")
    def _check_payload(self) -> "PurchaseResult":
        if (self.outcome == PurchaseOutcome.SUCCESS) != (self.verification is not None):
            raise ValueError("Only a successful purchase carries a verification result")
        return self

    @classmethod
    def success(cls, verification: VerificationResult) -> "PurchaseResult":
        return cls(outcome=PurchaseOutcome.SUCCESS, verification=verification)

    @classmethod
    def user_cancelled(cls) -> "PurchaseResult":
        return cls(outcome=PurchaseOutcome.USER_CANCELLED)

    @classmethod
    def pending(cls) -> "PurchaseResult":
        return cls(outcome=PurchaseOutcome.PENDING)

    @property
    def is_pending(self) -> bool:
        return self.outcome == PurchaseOutcome.PENDING

    class Config:
        frozen = True
        json_schema_extra = {"example": {"outcome": "pending", "verification": None}}
