"""Request and response bodies for the preview HTTP API."""

from pydantic import BaseModel, Field

from iap_preview.models.purchase import PurchaseOption


class PurchaseRequest(BaseModel):
    """Body of POST /products/{product_id}/purchase."""

    options: list[PurchaseOption] = Field(default_factory=list, description="Purchase options")

    class Config:
        json_schema_extra = {
            "example": {
                "options": [
                    {"kind": "quantity", "quantity": 1},
                    {"kind": "app_account_token", "token": "5f0c1c5e-8d8a-4b8e-9b53-0e6a3bd3c2a1"},
                ]
            }
        }


class ErrorResponse(BaseModel):
    """Error body returned for 4xx/5xx responses."""

    error: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable message")
