"""
Tests for product API endpoints.

The product service is replaced with an AsyncMock and authentication is
overridden, so these tests cover routing, status codes and serialization.
"""

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient
from datetime import datetime, timezone

from api.app import create_app
from api.dependencies import get_auth_service, get_product_service, get_store_health
from api.middleware.auth import get_current_user
from modules.auth.interfaces import IAuthService
from modules.products.exceptions import (
    DuplicateSkuError,
    InvalidProductIdError,
    ProductNotFoundError,
    ProductValidationError,
)
from modules.products.interfaces import IProductService
from modules.products.models import (
    CategoryStat,
    Product,
    ProductCreator,
    ProductInput,
    ProductListResponse,
    ProductStats,
)
from shared.validation import FieldError

PRODUCT_ID = "650000000000000000000001"


@pytest.fixture
def mock_product() -> Product:
    """Create a mock product for testing."""
    return Product(
        id=PRODUCT_ID,
        name="USB Cable",
        quantity=25,
        price=4.0,
        category="Electronics",
        description="1m braided",
        sku="ELE-123456-007",
        created_by=ProductCreator(id="64b7f0c2a1e4d3b2c1a09f8e", name="Test User", email="test@example.com"),
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        updated_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def mock_service() -> AsyncMock:
    return AsyncMock(spec=IProductService)


@pytest.fixture
def client(mock_service, test_user, online_store) -> TestClient:
    """Client with an online store, a signed-in user and a mocked service."""
    app = create_app()
    app.dependency_overrides[get_store_health] = lambda: online_store
    app.dependency_overrides[get_current_user] = lambda: test_user
    app.dependency_overrides[get_product_service] = lambda: mock_service
    return TestClient(app)


class TestListProducts:
    """Tests for GET /api/products"""

    def test_list_products(self, client, mock_service, mock_product, auth_headers):
        mock_service.list_products.return_value = ProductListResponse(
            products=[mock_product], total_pages=3, current_page=1, total=25,
        )

        response = client.get("/api/products", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["totalPages"] == 3
        assert data["currentPage"] == 1
        assert data["total"] == 25
        assert data["products"][0]["sku"] == "ELE-123456-007"
        assert data["products"][0]["createdBy"]["name"] == "Test User"

    def test_query_parameters_forwarded(self, client, mock_service, auth_headers):
        mock_service.list_products.return_value = ProductListResponse(
            products=[], total_pages=0, current_page=2, total=0,
        )

        client.get(
            "/api/products?page=2&limit=5&category=Books&search=cable&sort=-price",
            headers=auth_headers,
        )

        mock_service.list_products.assert_awaited_once_with(
            category="Books", search="cable", page="2", limit="5", sort="-price",
        )

    def test_junk_paging_does_not_fail(self, client, mock_service, auth_headers):
        """Non-numeric page/limit are passed through for the service to default."""
        mock_service.list_products.return_value = ProductListResponse(
            products=[], total_pages=0, current_page=1, total=0,
        )

        response = client.get("/api/products?page=abc&limit=-1", headers=auth_headers)

        assert response.status_code == 200


class TestGetProduct:
    """Tests for GET /api/products/{id}"""

    def test_get_product(self, client, mock_service, mock_product, auth_headers):
        mock_service.get_product.return_value = mock_product

        response = client.get(f"/api/products/{PRODUCT_ID}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["id"] == PRODUCT_ID
        mock_service.get_product.assert_awaited_once_with(PRODUCT_ID)

    def test_get_product_not_found(self, client, mock_service, auth_headers):
        mock_service.get_product.side_effect = ProductNotFoundError(PRODUCT_ID)

        response = client.get(f"/api/products/{PRODUCT_ID}", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"message": "Product not found", "error": "PRODUCT_NOT_FOUND"}

    def test_get_product_invalid_id(self, client, mock_service, auth_headers):
        mock_service.get_product.side_effect = InvalidProductIdError("bad")

        response = client.get("/api/products/bad", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid product ID"


class TestStats:
    """Tests for GET /api/products/stats/overview"""

    def test_stats(self, client, mock_service, auth_headers):
        mock_service.get_stats.return_value = ProductStats(
            total_products=2,
            total_value=150,
            category_stats=[CategoryStat(category="Books", count=2, value=150)],
            low_stock=1,
        )

        response = client.get("/api/products/stats/overview", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            "totalProducts": 2,
            "totalValue": 150,
            "categoryStats": [{"category": "Books", "count": 2, "value": 150}],
            "lowStock": 1,
        }
        mock_service.get_product.assert_not_called()


class TestCreateProduct:
    """Tests for POST /api/products"""

    def test_create_product(self, client, mock_service, mock_product, test_user, auth_headers):
        mock_service.create_product.return_value = mock_product

        response = client.post(
            "/api/products",
            json={"name": "USB Cable", "quantity": 25, "price": 4, "category": "Electronics"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Product created successfully"
        assert data["product"]["id"] == PRODUCT_ID

        payload, user_id = mock_service.create_product.call_args.args
        assert isinstance(payload, ProductInput)
        assert payload.quantity == 25
        assert user_id == test_user.id

    def test_create_product_validation_error(self, client, mock_service, auth_headers):
        mock_service.create_product.side_effect = ProductValidationError(
            [FieldError("quantity", "Quantity cannot be negative")]
        )

        response = client.post(
            "/api/products",
            json={"name": "USB Cable", "quantity": -1, "price": 4, "category": "Electronics"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Quantity cannot be negative", "error": "VALIDATION_FAILED"}

    def test_create_product_bad_type(self, client, mock_service, auth_headers):
        """A non-numeric quantity is rejected before the service runs."""
        response = client.post(
            "/api/products",
            json={"name": "USB Cable", "quantity": "lots", "price": 4, "category": "Electronics"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert "quantity" in response.json()["message"]
        mock_service.create_product.assert_not_called()

    def test_create_product_duplicate_sku(self, client, mock_service, auth_headers):
        mock_service.create_product.side_effect = DuplicateSkuError("ELE-1")

        response = client.post(
            "/api/products",
            json={"name": "USB Cable", "quantity": 1, "price": 4, "category": "Electronics", "sku": "ELE-1"},
            headers=auth_headers,
        )

        assert response.status_code == 409
        assert response.json()["message"] == "SKU already exists"


class TestUpdateProduct:
    """Tests for PUT /api/products/{id}"""

    def test_update_product(self, client, mock_service, mock_product, auth_headers):
        mock_service.update_product.return_value = mock_product

        response = client.put(
            f"/api/products/{PRODUCT_ID}",
            json={"price": 4.0},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Product updated successfully"
        product_id, payload = mock_service.update_product.call_args.args
        assert product_id == PRODUCT_ID
        assert payload.supplied_fields() == {"price": 4.0}

    def test_update_product_not_found(self, client, mock_service, auth_headers):
        mock_service.update_product.side_effect = ProductNotFoundError(PRODUCT_ID)

        response = client.put(f"/api/products/{PRODUCT_ID}", json={"price": 1}, headers=auth_headers)

        assert response.status_code == 404


class TestDeleteProduct:
    """Tests for DELETE /api/products/{id}"""

    def test_delete_product(self, client, mock_service, auth_headers):
        mock_service.delete_product.return_value = None

        response = client.delete(f"/api/products/{PRODUCT_ID}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Product deleted successfully"}

    def test_delete_product_not_found(self, client, mock_service, auth_headers):
        mock_service.delete_product.side_effect = ProductNotFoundError(PRODUCT_ID)

        response = client.delete(f"/api/products/{PRODUCT_ID}", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"


class TestAuthRequired:
    """Every product route requires a bearer token."""

    @pytest.fixture
    def unauthenticated_client(self, mock_service, online_store) -> TestClient:
        app = create_app()
        app.dependency_overrides[get_auth_service] = lambda: AsyncMock(spec=IAuthService)
        app.dependency_overrides[get_store_health] = lambda: online_store
        app.dependency_overrides[get_product_service] = lambda: mock_service
        return TestClient(app)

    @pytest.mark.parametrize("method,path", [
        ("get", "/api/products"),
        ("get", "/api/products/stats/overview"),
        ("get", f"/api/products/{PRODUCT_ID}"),
        ("post", "/api/products"),
        ("put", f"/api/products/{PRODUCT_ID}"),
        ("delete", f"/api/products/{PRODUCT_ID}"),
    ])
    def test_requires_token(self, unauthenticated_client, mock_service, method, path):
        kwargs = {"json": {}} if method in ("post", "put") else {}

        response = getattr(unauthenticated_client, method)(path, **kwargs)

        assert response.status_code == 401
        assert response.json() == {"message": "Access token required", "error": "MISSING_TOKEN"}
        assert mock_service.mock_calls == []
