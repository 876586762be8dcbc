"""Purchase Manager - the preview purchase flow.

Every purchase waits for the configured delay and then resolves to PENDING.
Product, price and options are not inspected, so preview screens always land
in the "waiting for approval" state.
"""

import asyncio
import time
from typing import Iterable, Optional

from iap_preview.config import Config, get_config
from iap_preview.logging_config import get_logger
from iap_preview.models import Product, PurchaseResult

logger = get_logger(__name__)


def _option_kinds(options: Optional[Iterable]) -> list[str]:
    """Option kinds for logging; accepts models, raw dicts or None."""
    kinds = set()
    for option in options or ():
        if isinstance(option, dict):
            kind = option.get("kind")
        else:
            kind = getattr(option, "kind", None)
        kinds.add(str(kind) if kind is not None else type(option).__name__)
    return sorted(kinds)


class PurchaseManager:
    """Handles purchase attempts against the preview store."""

    def __init__(self, config: Optional[Config] = None, delay_seconds: Optional[float] = None):
        """Initialize purchase manager.

        Args:
            config: Configuration instance (uses global if not provided)
            delay_seconds: Override the configured purchase delay
        """
        self._config = config if config is not None else get_config()
        self._delay_override = delay_seconds

    @property
    def delay_seconds(self) -> float:
        if self._delay_override is not None:
            return self._delay_override
        return self._config.preview_settings.purchase_delay_seconds

    async def purchase(self, product: Product, options: Optional[Iterable] = ()) -> PurchaseResult:
        """Attempt to buy a product.

        Args:
            product: Product to buy
            options: Purchase options (see iap_preview.models.purchase)

        Returns:
            PurchaseResult, always PENDING
        """
        delay = self.delay_seconds
        logger.info(
            "purchase_started",
            product_id=product.id,
            option_kinds=_option_kinds(options),
            delay_seconds=delay,
        )

        started = time.monotonic()
        await asyncio.sleep(delay)
        result = PurchaseResult.pending()

        logger.info(
            "purchase_resolved",
            product_id=product.id,
            outcome=result.outcome.value,
            duration_ms=round((time.monotonic() - started) * 1000, 2),
        )
        return result


# Global manager instance
_manager_instance: Optional[PurchaseManager] = None


def get_purchase_manager() -> PurchaseManager:
    global _manager_instance
    if _manager_instance is None:
        _manager_instance = PurchaseManager()
    return _manager_instance


def reset_purchase_manager() -> None:
    global _manager_instance
    _manager_instance = None
