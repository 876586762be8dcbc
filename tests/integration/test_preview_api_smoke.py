"""Smoke tests for the preview HTTP API."""

import pytest
from fastapi.testclient import TestClient

from iap_preview.main import create_app


@pytest.fixture
def client(fast_config_path):
    """Test client over a preview store with a short purchase delay."""
    with TestClient(create_app()) as test_client:
        yield test_client


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["service"] == "iap-preview"


def test_health(client):
    data = client.get("/health").json()
    assert data["status"] == "healthy"
    assert data["backend"] == "preview"
    assert data["catalog"] == "loaded (4 products)"


def test_list_products(client):
    response = client.get("/products")
    assert response.status_code == 200
    data = response.json()

    assert [p["id"] for p in data] == ["A", "B", "C", "D"]
    pro_monthly = data[2]
    assert pro_monthly["display_name"] == "Pro (Monthly)"
    assert pro_monthly["price"] == "2.99"
    assert pro_monthly["display_price"] == "$2.99"
    assert pro_monthly["type"] == "auto_renewable"
    assert pro_monthly["subscription"] == {"subscription_period": {"unit": "month", "value": 1}}


def test_list_products_ignores_unknown_ids(client):
    response = client.get("/products", params={"ids": ["nonexistent-id"]})
    assert len(response.json()) == 4


def test_purchase_is_pending(client):
    response = client.post("/products/C/purchase")
    assert response.status_code == 200
    assert response.json() == {"outcome": "pending", "verification": None}


def test_purchase_with_options(client):
    response = client.post(
        "/products/D/purchase",
        json={
            "options": [
                {"kind": "quantity", "quantity": 1},
                {"kind": "custom", "key": "source", "value": "paywall"},
            ]
        },
    )
    assert response.status_code == 200
    assert response.json()["outcome"] == "pending"


def test_purchase_with_malformed_options(client):
    response = client.post(
        "/products/D/purchase", json={"options": [{"kind": "quantity", "quantity": 0}]}
    )
    assert response.status_code == 422


def test_purchase_unknown_product(client):
    response = client.post("/products/nonexistent-id/purchase")
    assert response.status_code == 404
    assert response.json()["detail"]["error"] == "product_not_found"


@pytest.mark.parametrize("path", ["/transactions/updates", "/transactions/current-entitlements"])
def test_transaction_streams(client, path):
    response = client.get(path)
    assert response.status_code == 200
    data = response.json()

    assert len(data) == 1
    assert data[0]["status"] == "verified"
    transaction = data[0]["transaction"]
    assert transaction["product_id"] == "Pro.Monthly"
    assert transaction["purchased_quantity"] == 1
    assert transaction["revocation_date"] is None
    assert transaction["product_type"] == "auto_renewable"


def test_request_id_header(client):
    response = client.get("/products", headers={"X-Request-ID": "preview-42"})
    assert response.headers["X-Request-ID"] == "preview-42"
    assert client.get("/").headers["X-Request-ID"]


def test_context_middleware_binds_product_id():
    """The product id from /products/{id}/... reaches handlers through the log context."""
    import structlog
    from fastapi import FastAPI

    from iap_preview.middleware import ContextMiddleware

    app = FastAPI()
    app.add_middleware(ContextMiddleware)

    @app.post("/products/{product_id}/purchase")
    async def bound_context(product_id: str) -> dict:
        return structlog.contextvars.get_contextvars()

    with TestClient(app) as test_client:
        response = test_client.post("/products/C/purchase")

    assert response.json()["product_id"] == "C"
