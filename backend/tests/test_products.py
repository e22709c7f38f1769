"""Tests for the product catalogue endpoints."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from backend.app.models.product import Product


class TestCreateProduct:
    def test_create_product(self, client: TestClient) -> None:
        resp = client.post(
            "/api/v1/products",
            json={"name": "Latte", "price": "11.90", "description": "Tall"},
        )
        assert resp.status_code == 201
        data = resp.json()
        assert data["name"] == "Latte"
        assert Decimal(data["price"]) == Decimal("11.90")
        assert data["description"] == "Tall"
        assert data["image_uri"] is None
        assert data["is_active"] is True

    def test_duplicate_name_returns_409(self, client: TestClient, product_a: Product) -> None:
        resp = client.post("/api/v1/products", json={"name": "Espresso", "price": 5})
        assert resp.status_code == 409
        assert resp.json()["detail"] == "A product with this name already exists"

    def test_zero_price_returns_400(self, client: TestClient) -> None:
        resp = client.post("/api/v1/products", json={"name": "Free", "price": 0})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "price: Price must be greater than zero"

    def test_negative_price_returns_400(self, client: TestClient) -> None:
        resp = client.post("/api/v1/products", json={"name": "Refund", "price": -1})
        assert resp.status_code == 400

    def test_missing_name_returns_400(self, client: TestClient) -> None:
        resp = client.post("/api/v1/products", json={"price": 3})
        assert resp.status_code == 400


class TestReadProducts:
    def test_list_ordered_by_name(
        self, client: TestClient, product_a: Product, product_b: Product
    ) -> None:
        resp = client.get("/api/v1/products")
        assert resp.status_code == 200
        assert [p["name"] for p in resp.json()] == ["Croissant", "Espresso"]

    def test_list_filters_by_active(
        self, client: TestClient, db: Session, product_a: Product, product_b: Product
    ) -> None:
        product_b.is_active = False
        db.commit()
        active = client.get("/api/v1/products", params={"active": "true"}).json()
        inactive = client.get("/api/v1/products", params={"active": "false"}).json()
        assert [p["name"] for p in active] == ["Espresso"]
        assert [p["name"] for p in inactive] == ["Croissant"]

    def test_get_missing_product_returns_404(self, client: TestClient) -> None:
        resp = client.get(f"/api/v1/products/{uuid4()}")
        assert resp.status_code == 404


class TestUpdateProduct:
    def test_rename_to_existing_name_returns_409(
        self, client: TestClient, product_a: Product, product_b: Product
    ) -> None:
        resp = client.put(f"/api/v1/products/{product_b.id}", json={"name": "Espresso"})
        assert resp.status_code == 409

    def test_keeping_own_name_succeeds(self, client: TestClient, product_a: Product) -> None:
        resp = client.put(
            f"/api/v1/products/{product_a.id}",
            json={"name": "Espresso", "price": "7.00"},
        )
        assert resp.status_code == 200
        assert resp.json()["name"] == "Espresso"
        assert Decimal(resp.json()["price"]) == Decimal("7.00")

    def test_non_positive_price_returns_400(
        self, client: TestClient, product_a: Product
    ) -> None:
        resp = client.put(f"/api/v1/products/{product_a.id}", json={"price": 0})
        assert resp.status_code == 400

    def test_null_price_returns_400(self, client: TestClient, product_a: Product) -> None:
        resp = client.put(f"/api/v1/products/{product_a.id}", json={"price": None})
        assert resp.status_code == 400

    def test_description_cleared_with_null(
        self, client: TestClient, product_a: Product
    ) -> None:
        resp = client.put(f"/api/v1/products/{product_a.id}", json={"description": None})
        assert resp.status_code == 200
        assert resp.json()["description"] is None

    def test_absent_description_is_left_alone(
        self, client: TestClient, product_a: Product
    ) -> None:
        resp = client.put(
            f"/api/v1/products/{product_a.id}", json={"image_uri": "/img/espresso.png"}
        )
        assert resp.status_code == 200
        assert resp.json()["description"] == "Single shot"
        assert resp.json()["image_uri"] == "/img/espresso.png"

    def test_deactivate(self, client: TestClient, product_a: Product) -> None:
        resp = client.put(f"/api/v1/products/{product_a.id}", json={"is_active": False})
        assert resp.status_code == 200
        assert resp.json()["is_active"] is False

    def test_missing_product_returns_404(self, client: TestClient) -> None:
        resp = client.put(f"/api/v1/products/{uuid4()}", json={"price": 1})
        assert resp.status_code == 404


class TestDeleteProduct:
    def test_delete_product(self, client: TestClient, db: Session, product_a: Product) -> None:
        product_id = product_a.id
        resp = client.delete(f"/api/v1/products/{product_id}")
        assert resp.status_code == 200
        db.expire_all()
        assert db.get(Product, product_id) is None

    def test_delete_missing_product_returns_404(self, client: TestClient) -> None:
        resp = client.delete(f"/api/v1/products/{uuid4()}")
        assert resp.status_code == 404
