"""Transaction and verification models.

A Transaction mirrors the platform's transaction record. VerificationResult
wraps it with the outcome of signature verification, the way the real store
hands transactions to an app.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from iap_preview.logging_config import get_logger
from iap_preview.models.product import ProductType

logger = get_logger(__name__)

# Product kinds that are always bought one at a time
SINGLE_QUANTITY_TYPES = frozenset({ProductType.NON_CONSUMABLE, ProductType.AUTO_RENEWABLE})


class RevocationReason(str, Enum):
    """Why the store revoked a transaction."""

    DEVELOPER_ISSUE = "developer_issue"  # Refunded due to an issue in the app
    OTHER = "other"


class VerificationStatus(str, Enum):
    VERIFIED = "verified"
    UNVERIFIED = "unverified"


class VerificationError(Exception):
    """Raised when reading the payload of an unverified result."""

    pass


class Transaction(BaseModel):
    """A completed purchase of a product."""

    product_id: str = Field(..., description="Identifier of the purchased product")
    purchase_date: datetime = Field(..., description="When this transaction occurred")
    original_purchase_date: datetime = Field(
        ..., description="When the first transaction in this purchase lineage occurred"
    )
    expiration_date: Optional[datetime] = Field(
        None, description="When access expires (subscriptions only)"
    )
    purchased_quantity: int = Field(default=1, ge=1, description="Quantity purchased")
    is_upgraded: bool = Field(
        default=False, description="Superseded by a higher level of service"
    )
    revocation_date: Optional[datetime] = Field(None, description="When the transaction was revoked")
    revocation_reason: Optional[RevocationReason] = Field(None, description="Why it was revoked")
    product_type: ProductType = Field(..., description="Kind of the purchased product")

    @model_validator(mode="after")
    def _check_invariants(self) -> "Transaction":
        if (self.revocation_date is None) != (self.revocation_reason is None):
            raise ValueError("revocation_date and revocation_reason must be set together")
        if self.product_type in SINGLE_QUANTITY_TYPES and self.purchased_quantity != 1:
            raise ValueError(
                f"purchased_quantity must be 1 for {self.product_type.value} products, "
                f"got {self.purchased_quantity}"
            )
        return self

    @property
    def is_revoked(self) -> bool:
        return self.revocation_date is not None

    async def finish(self) -> None:
        """Mark the transaction as handled. Nothing to do for fixtures."""
        logger.debug("transaction_finished", product_id=self.product_id)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "product_id": "Pro.Monthly",
                "purchase_date": "2026-10-15T12:00:00Z",
                "original_purchase_date": "2026-09-15T12:00:00Z",
                "expiration_date": "2026-11-14T12:00:00Z",
                "purchased_quantity": 1,
                "is_upgraded": False,
                "revocation_date": None,
                "revocation_reason": None,
                "product_type": "auto_renewable",
            }
        }


class VerificationResult(BaseModel):
    """A transaction plus whether its signature could be confirmed."""

    status: VerificationStatus = Field(..., description="Verification outcome")
    transaction: Transaction = Field(..., description="The wrapped transaction")
    error: Optional[str] = Field(None, description="Why verification failed")

    @model_validator(mode="after")
    def _check_error(self) -> "VerificationResult":
        if self.status == VerificationStatus.VERIFIED and self.error is not None:
            raise ValueError("A verified result cannot carry an error")
        if self.status == VerificationStatus.UNVERIFIED and not self.error:
            raise ValueError("An unverified result requires an error")
        return self

    @classmethod
    def verified(cls, transaction: Transaction) -> "VerificationResult":
        return cls(status=VerificationStatus.VERIFIED, transaction=transaction)

    @classmethod
    def unverified(cls, transaction: Transaction, error: str) -> "VerificationResult":
        return cls(status=VerificationStatus.UNVERIFIED, transaction=transaction, error=error)

    @property
    def is_verified(self) -> bool:
        return self.status == VerificationStatus.VERIFIED

    @property
    def payload_value(self) -> Transaction:
        """The transaction, if verification succeeded.

        Raises:
            VerificationError: If the result is unverified
        """
        if not self.is_verified:
            raise VerificationError(self.error)
        return self.transaction

    @property
    def unsafe_payload_value(self) -> Transaction:
        """The transaction regardless of verification outcome."""
        return self.transaction

    @property
    def verification_error(self) -> Optional[str]:
        return self.error

    class Config:
        frozen = True
