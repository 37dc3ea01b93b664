"""Integration tests for the product endpoints."""

from __future__ import annotations

from datetime import date

import pytest

from modules.core.models import new_id
from modules.orders.models import Position
from modules.products.models import Product

pytestmark = pytest.mark.integration

BASE = "/api/v1/product"


class TestProductApi:
    def test_create(self, api_client):
        response = api_client.post(
            f"{BASE}/add", {"name": "Tea", "unit": "box", "price": "3.20"}, format="json"
        )

        assert response.status_code == 201
        body = response.json()
        assert body["price"] == "3.20"
        assert Product.objects.filter(pk=body["id"], name="Tea").exists()

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "", "unit": "box", "price": "1.00"},
            {"name": "Tea", "unit": "box", "price": "-1"},
            {"name": "Tea", "unit": "box"},
            {"name": "Tea", "unit": "box", "price": "1.234"},
        ],
    )
    def test_create_invalid(self, api_client, payload):
        response = api_client.post(f"{BASE}/add", payload, format="json")

        assert response.status_code == 400
        assert not Product.objects.exists()

    def test_list_and_get(self, api_client, product):
        listed = api_client.get(f"{BASE}/all").json()
        fetched = api_client.get(f"{BASE}/{product.id}")

        assert [p["id"] for p in listed] == [product.id]
        assert fetched.status_code == 200
        assert fetched.json()["name"] == product.name

    def test_get_unknown(self, api_client):
        response = api_client.get(f"{BASE}/{new_id()}")

        assert response.status_code == 404
        assert response.json()["code"] == "product_not_found"

    def test_update(self, api_client, product):
        response = api_client.put(
            f"{BASE}/update/{product.id}", {"name": "Renamed"}, format="json"
        )

        assert response.status_code == 200
        product.refresh_from_db()
        assert product.name == "Renamed"

    def test_update_unknown(self, api_client):
        response = api_client.put(f"{BASE}/update/{new_id()}", {"name": "X"}, format="json")

        assert response.status_code == 404

    def test_delete(self, api_client, product):
        response = api_client.delete(f"{BASE}/delete/{product.id}")

        assert response.status_code == 200
        assert not Product.objects.exists()

    def test_delete_referenced(self, api_client, order_repo, product):
        order = order_repo.create(date(2024, 1, 1))
        Position.objects.create(order_id=order.id, product=product, quantity=1)

        response = api_client.delete(f"{BASE}/delete/{product.id}")

        assert response.status_code == 409
        assert response.json()["code"] == "product_in_order"
        assert Product.objects.filter(pk=product.id).exists()
