"""Warehouse API views.

Exposes ``WarehouseService`` via HTTP.  Domain exceptions are caught
and translated with ``error_response``; anything else propagates to the
project exception handler.
"""

from __future__ import annotations

from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import error_response
from modules.products.exceptions import ProductNotFound
from modules.products.repositories import ProductSqlRepository
from modules.warehouses.exceptions import InvalidQuantity, WarehouseNotFound
from modules.warehouses.models import Warehouse
from modules.warehouses.repositories import StockSqlRepository, WarehouseSqlRepository
from modules.warehouses.serializers import (
    ProductTotalSerializer,
    QuantitySerializer,
    WarehouseSerializer,
)
from modules.warehouses.services import WarehouseService


class WarehouseViewSet(GenericViewSet):
    """Warehouse listing and per-product stock changes."""

    queryset = Warehouse.objects.all()
    serializer_class = WarehouseSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = WarehouseService(
            warehouse_repository=WarehouseSqlRepository(),
            stock_repository=StockSqlRepository(),
            product_repository=ProductSqlRepository(),
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/warehouse/all"""
        warehouses = self._service.list_active_warehouses()
        return Response(WarehouseSerializer(warehouses, many=True).data)

    def retrieve(self, request: Request, warehouse_id: int) -> Response:
        """GET /api/v1/warehouse/{warehouse_id}"""
        try:
            warehouse = self._service.get_warehouse(warehouse_id)
        except WarehouseNotFound as exc:
            return error_response(exc)
        return Response(WarehouseSerializer(warehouse).data)

    def product_total(self, request: Request, product_id: str) -> Response:
        """GET /api/v1/warehouse/product/{product_id}/total"""
        try:
            total = self._service.total_product_quantity(product_id)
        except ProductNotFound as exc:
            return error_response(exc)
        out = ProductTotalSerializer({"product_id": product_id, "total_quantity": total})
        return Response(out.data)

    # ------------------------------------------------------------------
    # Stock changes
    # ------------------------------------------------------------------

    def add_quantity(self, request: Request, product_id: str, warehouse_id: int) -> Response:
        """POST /api/v1/warehouse/add/product/{product_id}/warehouse/{warehouse_id}"""
        return self._change(self._service.add_product_quantity, request, product_id, warehouse_id)

    def reduce_quantity(self, request: Request, product_id: str, warehouse_id: int) -> Response:
        """POST /api/v1/warehouse/reduce/product/{product_id}/warehouse/{warehouse_id}"""
        return self._change(
            self._service.reduce_product_quantity, request, product_id, warehouse_id
        )

    def _change(self, operation, request: Request, product_id: str, warehouse_id: int) -> Response:
        serializer = QuantitySerializer.from_body(request.data)
        serializer.is_valid(raise_exception=True)
        amount = serializer.validated_data["quantity"]
        try:
            operation(product_id, warehouse_id, amount)
        except (InvalidQuantity, ProductNotFound, WarehouseNotFound) as exc:
            return error_response(exc)
        return Response(
            {
                "product_id": product_id,
                "warehouse_id": warehouse_id,
                "total_quantity": self._service.total_product_quantity(product_id),
            }
        )
