"""Tests for product, transaction and purchase model invariants."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from iap_preview.models import (
    AppAccountTokenOption,
    Product,
    ProductType,
    PurchaseOptionError,
    PurchaseOutcome,
    PurchaseResult,
    QuantityOption,
    RevocationReason,
    SubscriptionInfo,
    SubscriptionPeriod,
    Transaction,
    VerificationError,
    VerificationResult,
    parse_purchase_options,
)

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)
MONTHLY = SubscriptionInfo(subscription_period=SubscriptionPeriod.from_iso8601("P1M"))


def make_product(**overrides):
    fields = dict(
        id="C",
        type=ProductType.AUTO_RENEWABLE,
        display_name="Pro (Monthly)",
        description="Unlimited documents, up to 5 team members",
        price=Decimal("2.99"),
        display_price="$2.99",
        subscription=MONTHLY,
    )
    fields.update(overrides)
    return Product(**fields)


def make_transaction(**overrides):
    fields = dict(
        product_id="Pro.Monthly",
        purchase_date=NOW - timedelta(days=3),
        original_purchase_date=NOW - timedelta(days=33),
        expiration_date=NOW + timedelta(days=27),
        product_type=ProductType.AUTO_RENEWABLE,
    )
    fields.update(overrides)
    return Transaction(**fields)


class TestProduct:
    """Test Product invariants."""

    def test_auto_renewable_with_subscription(self):
        product = make_product()
        assert product.is_subscription
        assert product.price == Decimal("2.99")

    def test_auto_renewable_requires_subscription(self):
        with pytest.raises(ValidationError, match="requires subscription info"):
            make_product(subscription=None)

    @pytest.mark.parametrize(
        "product_type",
        [ProductType.CONSUMABLE, ProductType.NON_CONSUMABLE, ProductType.NON_RENEWABLE],
    )
    def test_other_types_reject_subscription(self, product_type):
        with pytest.raises(ValidationError, match="must not carry subscription info"):
            make_product(type=product_type)

    def test_non_consumable_without_subscription(self):
        product = make_product(id="lifetime", type=ProductType.NON_CONSUMABLE, subscription=None)
        assert not product.is_subscription

    def test_price_is_exact_decimal(self):
        product = make_product(price="0.1")
        assert product.price + Decimal("0.2") == Decimal("0.3")

    def test_product_is_immutable(self):
        product = make_product()
        with pytest.raises(ValidationError):
            product.price = Decimal("0")

    def test_product_is_hashable(self):
        assert len({make_product(), make_product()}) == 1


class TestTransaction:
    """Test Transaction invariants."""

    def test_defaults(self):
        transaction = make_transaction()
        assert transaction.purchased_quantity == 1
        assert transaction.is_upgraded is False
        assert transaction.is_revoked is False

    def test_revocation_fields_must_be_paired(self):
        with pytest.raises(ValidationError, match="set together"):
            make_transaction(revocation_date=NOW)
        with pytest.raises(ValidationError, match="set together"):
            make_transaction(revocation_reason=RevocationReason.OTHER)

    def test_revoked_transaction(self):
        transaction = make_transaction(
            revocation_date=NOW, revocation_reason=RevocationReason.DEVELOPER_ISSUE
        )
        assert transaction.is_revoked

    @pytest.mark.parametrize("product_type", [ProductType.NON_CONSUMABLE, ProductType.AUTO_RENEWABLE])
    def test_single_quantity_types(self, product_type):
        with pytest.raises(ValidationError, match="purchased_quantity must be 1"):
            make_transaction(product_type=product_type, purchased_quantity=2)

    def test_consumable_allows_quantity(self):
        transaction = make_transaction(
            product_type=ProductType.CONSUMABLE, purchased_quantity=5, expiration_date=None
        )
        assert transaction.purchased_quantity == 5

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            make_transaction(product_type=ProductType.CONSUMABLE, purchased_quantity=0)

    @pytest.mark.asyncio
    async def test_finish_is_noop(self):
        transaction = make_transaction()
        assert await transaction.finish() is None


class TestVerificationResult:
    """Test VerificationResult wrapping."""

    def test_verified_payload(self):
        transaction = make_transaction()
        result = VerificationResult.verified(transaction)
        assert result.is_verified
        assert result.payload_value == transaction
        assert result.verification_error is None

    def test_unverified_payload_raises(self):
        transaction = make_transaction()
        result = VerificationResult.unverified(transaction, "invalid signature")
        assert not result.is_verified
        assert result.unsafe_payload_value == transaction
        with pytest.raises(VerificationError, match="invalid signature"):
            result.payload_value

    def test_unverified_requires_error(self):
        with pytest.raises(ValidationError):
            VerificationResult(status="unverified", transaction=make_transaction())

    def test_verified_rejects_error(self):
        with pytest.raises(ValidationError):
            VerificationResult(status="verified", transaction=make_transaction(), error="nope")


class TestPurchaseResult:
    """Test the PurchaseResult tagged variant."""

    def test_pending(self):
        result = PurchaseResult.pending()
        assert result.outcome == PurchaseOutcome.PENDING
        assert result.is_pending
        assert result.verification is None

    def test_user_cancelled(self):
        assert PurchaseResult.user_cancelled().outcome == PurchaseOutcome.USER_CANCELLED

    def test_success_carries_verification(self):
        verification = VerificationResult.verified(make_transaction())
        result = PurchaseResult.success(verification)
        assert result.outcome == PurchaseOutcome.SUCCESS
        assert result.verification == verification

    def test_success_without_verification_rejected(self):
        with pytest.raises(ValidationError):
            PurchaseResult(outcome=PurchaseOutcome.SUCCESS)

    def test_pending_with_verification_rejected(self):
        verification = VerificationResult.verified(make_transaction())
        with pytest.raises(ValidationError):
            PurchaseResult(outcome=PurchaseOutcome.PENDING, verification=verification)


class TestPurchaseOptions:
    """Test purchase option parsing."""

    def test_parse_options(self):
        token = uuid4()
        options = parse_purchase_options(
            [
                {"kind": "quantity", "quantity": 2},
                {"kind": "app_account_token", "token": str(token)},
                {"kind": "simulates_ask_to_buy_in_sandbox"},
                {"kind": "custom", "key": "campaign", "value": "autumn"},
            ]
        )
        assert len(options) == 4
        assert QuantityOption(quantity=2) in options
        assert AppAccountTokenOption(token=token) in options

    def test_duplicate_options_collapse(self):
        options = parse_purchase_options([{"kind": "quantity", "quantity": 1}] * 2)
        assert len(options) == 1

    def test_bad_quantity_rejected(self):
        with pytest.raises(PurchaseOptionError):
            parse_purchase_options([{"kind": "quantity", "quantity": 0}])

    def test_unknown_kind_rejected(self):
        with pytest.raises(PurchaseOptionError):
            parse_purchase_options([{"kind": "promotional_offer"}])

    def test_malformed_token_rejected(self):
        with pytest.raises(PurchaseOptionError):
            parse_purchase_options([{"kind": "app_account_token", "token": "not-a-uuid"}])
