from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from modules.orders.dtos import AddPositionDTO, CreateOrderDTO
from modules.orders.models import Order
from modules.orders.repositories import OrderSqlRepository
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories import ProductSqlRepository
from modules.warehouses.aggregator import WarehouseAggregator
from modules.warehouses.models import StockAllocation, Warehouse
from modules.warehouses.repositories import StockSqlRepository, WarehouseSqlRepository

CATALOG = [
    ("Notebook 14\"", "piece", Decimal("899.00")),
    ("USB-C Cable", "piece", Decimal("9.90")),
    ("Printer Paper A4", "pack", Decimal("4.49")),
    ("Coffee Beans", "kg", Decimal("17.50")),
    ("Desk Lamp", "piece", Decimal("34.95")),
]

# (warehouse id, active)
WAREHOUSES = [(1, True), (2, True), (3, False)]


class Command(BaseCommand):
    help = "Seed database with sample products, warehouses, stock and one open order."

    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        with transaction.atomic():
            products = self._seed_products()
            warehouses = self._seed_warehouses()
            allocations = self._seed_stock(products, warehouses)
            WarehouseAggregator(
                WarehouseSqlRepository(), StockSqlRepository()
            ).recompute_active_warehouse_totals()
        orders_created = self._seed_order(products)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"products={len(products)}, "
                f"warehouses={len(warehouses)}, "
                f"stock_rows={allocations}, "
                f"orders={orders_created}"
            )
        )

    def _seed_products(self) -> list[Product]:
        products: list[Product] = []
        for name, unit, price in CATALOG:
            product, _ = Product.objects.get_or_create(
                name=name, defaults={"unit": unit, "price": price}
            )
            products.append(product)
        return products

    def _seed_warehouses(self) -> list[Warehouse]:
        return [
            Warehouse.objects.get_or_create(id=warehouse_id, defaults={"active": active})[0]
            for warehouse_id, active in WAREHOUSES
        ]

    def _seed_stock(self, products: list[Product], warehouses: list[Warehouse]) -> int:
        created = 0
        for index, product in enumerate(products):
            for offset, warehouse in enumerate(warehouses):
                _, was_created = StockAllocation.objects.get_or_create(
                    product=product,
                    warehouse=warehouse,
                    defaults={"quantity": 10 * (index + 1) + 5 * offset},
                )
                created += int(was_created)
        return created

    def _seed_order(self, products: list[Product]) -> int:
        if Order.objects.exists():
            self.stdout.write(self.style.WARNING("Skipping order (orders already exist)."))
            return 0
        service = OrderService(
            order_repository=OrderSqlRepository(),
            product_repository=ProductSqlRepository(),
            stock_repository=StockSqlRepository(),
            warehouse_repository=WarehouseSqlRepository(),
        )
        order = service.create_order(CreateOrderDTO())
        for product in products[:3]:
            service.add_position(order.id, AddPositionDTO(product_id=product.id, quantity=2))
        return 1
