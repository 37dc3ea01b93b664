"""Concurrent close integration test.

Two threads close the same order at once.  The order row lock makes
them serialize: exactly one deducts stock, the other sees the order
closed and is rejected.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from decimal import Decimal

from django.db import connections
from django.test import TransactionTestCase

from modules.orders.exceptions import OrderAlreadyClosed
from modules.orders.models import Order, Position
from modules.orders.repositories import OrderSqlRepository
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories import ProductSqlRepository
from modules.warehouses.models import StockAllocation, Warehouse
from modules.warehouses.repositories import StockSqlRepository, WarehouseSqlRepository

INITIAL_STOCK = 10
ORDERED = 4
NUM_WORKERS = 2


class TestConcurrentClose(TransactionTestCase):
    def setUp(self):
        self.product = Product.objects.create(name="Gadget", unit="piece", price=Decimal("5.00"))
        warehouse = Warehouse.objects.create()
        StockAllocation.objects.create(
            product=self.product, warehouse=warehouse, quantity=INITIAL_STOCK
        )
        self.order = Order.objects.create(order_date=date(2024, 1, 1))
        Position.objects.create(order=self.order, product=self.product, quantity=ORDERED)
        self.start = threading.Barrier(NUM_WORKERS, timeout=10)

    def _close_in_thread(self) -> str:
        try:
            service = OrderService(
                order_repository=OrderSqlRepository(),
                product_repository=ProductSqlRepository(),
                stock_repository=StockSqlRepository(),
                warehouse_repository=WarehouseSqlRepository(),
            )
            self.start.wait()
            try:
                service.close_order(self.order.id)
                return "closed"
            except OrderAlreadyClosed:
                return "rejected"
        finally:
            connections.close_all()

    def test_only_one_close_deducts(self):
        with ThreadPoolExecutor(max_workers=NUM_WORKERS) as pool:
            results = list(pool.map(lambda _: self._close_in_thread(), range(NUM_WORKERS)))

        self.assertEqual(sorted(results), ["closed", "rejected"])
        self.assertEqual(
            StockAllocation.objects.get(product=self.product).quantity,
            INITIAL_STOCK - ORDERED,
        )
        self.assertEqual(Order.objects.get(pk=self.order.pk).status, "closed")
