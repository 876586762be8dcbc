"""Transaction fixture and the two transaction streams.

Responsibilities:
- Build the fixed active-subscription transaction (once, on first access)
- Serve it through updates() and current_entitlements()

Each stream call returns a new async generator that yields the verified
fixture once and then completes. On a real store, updates() never ends and
current_entitlements() covers every active purchase.
"""

from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone
from threading import RLock
from typing import Optional

from iap_preview.config import get_config
from iap_preview.logging_config import get_logger
from iap_preview.models import Transaction, TransactionFixtureConfig, VerificationResult

logger = get_logger(__name__)


def build_preview_transaction(
    now: Optional[datetime] = None,
    settings: Optional[TransactionFixtureConfig] = None,
) -> Transaction:
    """Build the active-subscription transaction used by previews.

    With default settings the subscription started 33 days ago, last renewed
    3 days ago and expires in 27 days.

    Args:
        now: Reference time, defaults to the current UTC time
        settings: Fixture shape, defaults to TransactionFixtureConfig()
    """
    now = now or datetime.now(timezone.utc)
    settings = settings or TransactionFixtureConfig()

    expiration_date = None
    if settings.expires_in_days is not None:
        expiration_date = now + timedelta(days=settings.expires_in_days)

    return Transaction(
        product_id=settings.product_id,
        purchase_date=now - timedelta(days=settings.purchase_days_ago),
        original_purchase_date=now - timedelta(days=settings.original_purchase_days_ago),
        expiration_date=expiration_date,
        purchased_quantity=1,
        is_upgraded=False,
        revocation_date=None,
        revocation_reason=None,
        product_type=settings.product_type,
    )


_transaction_lock = RLock()
_transaction_instance: Optional[Transaction] = None


def get_preview_transaction() -> Transaction:
    """Get the shared fixture transaction, building it on first access."""
    global _transaction_instance
    with _transaction_lock:
        if _transaction_instance is None:
            settings = get_config().preview_settings.transaction
            _transaction_instance = build_preview_transaction(settings=settings)
            logger.debug(
                "preview_transaction_built",
                product_id=_transaction_instance.product_id,
                expiration_date=str(_transaction_instance.expiration_date),
            )
        return _transaction_instance


def reset_preview_transaction() -> None:
    """Forget the fixture so the next access rebuilds it (used in tests)."""
    global _transaction_instance
    with _transaction_lock:
        _transaction_instance = None


class TransactionFeed:
    """Serves the fixture transaction as updates and entitlements."""

    def __init__(self, transaction: Optional[Transaction] = None):
        """Initialize transaction feed.

        Args:
            transaction: Transaction to emit. Defaults to the shared fixture.
        """
        self._transaction = transaction

    @property
    def transaction(self) -> Transaction:
        if self._transaction is not None:
            return self._transaction
        return get_preview_transaction()

    async def _emit_once(self, stream: str) -> AsyncIterator[VerificationResult]:
        transaction = self.transaction
        logger.info("transaction_emitted", stream=stream, product_id=transaction.product_id)
        yield VerificationResult.verified(transaction)

    def updates(self) -> AsyncIterator[VerificationResult]:
        """Transactions created or updated outside a purchase call.

        Start iterating as early as possible at launch so approvals made
        while the app was not running are picked up.
        """
        return self._emit_once("updates")

    def current_entitlements(self) -> AsyncIterator[VerificationResult]:
        """Active subscriptions and non-refunded non-consumables."""
        return self._emit_once("current_entitlements")


# Global feed instance
_feed_instance: Optional[TransactionFeed] = None


def get_transaction_feed() -> TransactionFeed:
    global _feed_instance
    if _feed_instance is None:
        _feed_instance = TransactionFeed()
    return _feed_instance


def reset_transaction_feed() -> None:
    global _feed_instance
    _feed_instance = None


async def updates() -> AsyncIterator[VerificationResult]:
    """Module-level shortcut for the global feed's updates stream."""
    async for result in get_transaction_feed().updates():
        yield result


async def current_entitlements() -> AsyncIterator[VerificationResult]:
    """Module-level shortcut for the global feed's entitlements stream."""
    async for result in get_transaction_feed().current_entitlements():
        yield result
