"""Integration tests for the warehouse endpoints."""

from __future__ import annotations

import pytest

from modules.core.models import new_id
from modules.warehouses.models import StockAllocation

pytestmark = pytest.mark.integration

BASE = "/api/v1/warehouse"


class TestWarehouseReads:
    def test_list_only_active_with_totals(
        self, api_client, product, make_warehouse, stock
    ):
        active = make_warehouse()
        stock(product, active, 5)
        make_warehouse(active=False)

        response = api_client.get(f"{BASE}/all")

        assert response.status_code == 200
        assert response.json() == [{"id": active.id, "quantity": 5, "active": True}]

    def test_get(self, api_client, warehouse):
        response = api_client.get(f"{BASE}/{warehouse.id}")

        assert response.status_code == 200
        assert response.json()["id"] == warehouse.id

    def test_get_unknown(self, api_client):
        response = api_client.get(f"{BASE}/987654")

        assert response.status_code == 404
        assert response.json()["code"] == "warehouse_not_found"

    def test_product_total(self, api_client, product, make_warehouse, stock):
        stock(product, make_warehouse(), 2)
        stock(product, make_warehouse(), 3)

        response = api_client.get(f"{BASE}/product/{product.id}/total")

        assert response.json() == {"product_id": product.id, "total_quantity": 5}

    def test_product_total_unknown(self, api_client):
        assert api_client.get(f"{BASE}/product/{new_id()}/total").status_code == 404


class TestStockChanges:
    def test_add_with_object_body(self, api_client, product, warehouse):
        response = api_client.post(
            f"{BASE}/add/product/{product.id}/warehouse/{warehouse.id}",
            {"quantity": 8},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["total_quantity"] == 8
        warehouse.refresh_from_db()
        assert warehouse.quantity == 8

    def test_add_with_bare_integer_body(self, api_client, product, warehouse):
        response = api_client.post(
            f"{BASE}/add/product/{product.id}/warehouse/{warehouse.id}", 3, format="json"
        )

        assert response.status_code == 200
        assert StockAllocation.objects.get(product=product).quantity == 3

    def test_reduce_floors_at_zero(self, api_client, product, warehouse, stock):
        stock(product, warehouse, 2)

        response = api_client.post(
            f"{BASE}/reduce/product/{product.id}/warehouse/{warehouse.id}",
            {"quantity": 5},
            format="json",
        )

        assert response.status_code == 200
        assert StockAllocation.objects.get(product=product).quantity == 0

    @pytest.mark.parametrize("body", [{"quantity": 0}, {"quantity": -1}, -4])
    def test_non_positive_quantity(self, api_client, product, warehouse, body):
        response = api_client.post(
            f"{BASE}/add/product/{product.id}/warehouse/{warehouse.id}", body, format="json"
        )

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_quantity"

    def test_missing_quantity(self, api_client, product, warehouse):
        response = api_client.post(
            f"{BASE}/add/product/{product.id}/warehouse/{warehouse.id}", {}, format="json"
        )

        assert response.status_code == 400
        assert "quantity" in response.json()["errors"]

    @pytest.mark.parametrize("body", [{"quantity": 10**20}, 10**20])
    def test_quantity_beyond_column_range(self, api_client, product, warehouse, body):
        response = api_client.post(
            f"{BASE}/add/product/{product.id}/warehouse/{warehouse.id}", body, format="json"
        )

        assert response.status_code == 400
        assert response.json()["code"] == "invalid"
        assert "quantity" in response.json()["errors"]
        assert not StockAllocation.objects.exists()

    def test_unknown_warehouse(self, api_client, product):
        response = api_client.post(
            f"{BASE}/add/product/{product.id}/warehouse/555555", {"quantity": 1}, format="json"
        )

        assert response.status_code == 404
        assert response.json()["code"] == "warehouse_not_found"

    def test_unknown_product(self, api_client, warehouse):
        response = api_client.post(
            f"{BASE}/add/product/{new_id()}/warehouse/{warehouse.id}",
            {"quantity": 1},
            format="json",
        )

        assert response.status_code == 404
        assert response.json()["code"] == "product_not_found"
