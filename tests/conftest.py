from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from modules.orders.repositories import OrderSqlRepository
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories import ProductSqlRepository
from modules.products.services import ProductService
from modules.warehouses.models import StockAllocation, Warehouse
from modules.warehouses.repositories import StockSqlRepository, WarehouseSqlRepository
from modules.warehouses.services import WarehouseService


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Data factories
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_product():
    def _make(name="Widget", unit="piece", price=Decimal("9.99")):
        return Product.objects.create(name=name, unit=unit, price=price)

    return _make


@pytest.fixture()
def make_warehouse():
    def _make(active=True):
        return Warehouse.objects.create(active=active)

    return _make


@pytest.fixture()
def stock():
    """Put ``quantity`` units of a product into a warehouse ledger row."""

    def _stock(product, warehouse, quantity):
        return StockAllocation.objects.create(
            product=product, warehouse=warehouse, quantity=quantity
        )

    return _stock


@pytest.fixture()
def product(make_product):
    return make_product()


@pytest.fixture()
def warehouse(make_warehouse):
    return make_warehouse()


# ---------------------------------------------------------------------------
# Repositories & services
# ---------------------------------------------------------------------------


@pytest.fixture()
def stock_repo():
    return StockSqlRepository()


@pytest.fixture()
def warehouse_repo():
    return WarehouseSqlRepository()


@pytest.fixture()
def order_repo():
    return OrderSqlRepository()


@pytest.fixture()
def product_repo():
    return ProductSqlRepository()


@pytest.fixture()
def order_service(order_repo, product_repo, stock_repo, warehouse_repo):
    return OrderService(
        order_repository=order_repo,
        product_repository=product_repo,
        stock_repository=stock_repo,
        warehouse_repository=warehouse_repo,
    )


@pytest.fixture()
def product_service(product_repo, stock_repo, warehouse_repo):
    return ProductService(
        repository=product_repo,
        stock_repository=stock_repo,
        warehouse_repository=warehouse_repo,
    )


@pytest.fixture()
def warehouse_service(warehouse_repo, stock_repo, product_repo):
    return WarehouseService(
        warehouse_repository=warehouse_repo,
        stock_repository=stock_repo,
        product_repository=product_repo,
    )
