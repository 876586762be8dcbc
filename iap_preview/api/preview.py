"""Preview store HTTP endpoints.

Implements:
- GET  /products?ids=...
- POST /products/{product_id}/purchase
- GET  /transactions/updates
- GET  /transactions/current-entitlements

Streams are drained into a JSON list, one element per emitted transaction.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Path, Query

from iap_preview.logging_config import get_logger
from iap_preview.models import Product, PurchaseResult, VerificationResult
from iap_preview.models.api_request import ErrorResponse, PurchaseRequest
from iap_preview.repositories.product_catalog import ProductNotFoundError, get_product_catalog
from iap_preview.services.purchase_manager import get_purchase_manager
from iap_preview.services.transaction_feed import get_transaction_feed

logger = get_logger(__name__)
router = APIRouter(tags=["Preview Store"])


@router.get("/products", response_model=list[Product])
async def list_products(ids: Optional[list[str]] = Query(None)) -> list[Product]:
    """Query the catalog. Returns every product unless filtering is enabled."""
    return get_product_catalog().products(ids or [])


@router.post(
    "/products/{product_id}/purchase",
    response_model=PurchaseResult,
    responses={404: {"model": ErrorResponse}},
)
async def purchase_product(
    body: Optional[PurchaseRequest] = None,
    product_id: str = Path(...),
) -> PurchaseResult:
    try:
        product = get_product_catalog().get_by_id(product_id)
    except ProductNotFoundError as e:
        logger.warning("purchase_unknown_product", product_id=product_id)
        raise HTTPException(
            status_code=404,
            detail={"error": "product_not_found", "message": str(e)},
        )

    options = body.options if body is not None else []
    return await get_purchase_manager().purchase(product, options)


@router.get("/transactions/updates", response_model=list[VerificationResult])
async def transaction_updates() -> list[VerificationResult]:
    return [result async for result in get_transaction_feed().updates()]


@router.get("/transactions/current-entitlements", response_model=list[VerificationResult])
async def current_entitlements() -> list[VerificationResult]:
    return [result async for result in get_transaction_feed().current_entitlements()]
