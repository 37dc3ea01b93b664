"""Order API views.

Exposes the ``OrderService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into appropriate
HTTP status codes; the view never swallows generic exceptions.
"""

from __future__ import annotations

from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import error_response
from modules.orders.dtos import AddPositionDTO, CreateOrderDTO
from modules.orders.exceptions import (
    InsufficientStock,
    OrderAlreadyClosed,
    OrderClosed,
    OrderNotFound,
    PositionNotFound,
)
from modules.orders.models import Order
from modules.orders.repositories import OrderSqlRepository
from modules.orders.serializers import AddPositionSerializer, CreateOrderSerializer
from modules.orders.services import OrderService
from modules.products.exceptions import ProductNotFound
from modules.products.repositories import ProductSqlRepository
from modules.warehouses.repositories import StockSqlRepository, WarehouseSqlRepository


def _body(request: Request) -> dict:
    return request.data if isinstance(request.data, dict) else {}


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).
    Does **not** extend ``ModelViewSet``: all database access goes
    through the service/repository layer.
    """

    queryset = Order.objects.all()
    serializer_class = CreateOrderSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderSqlRepository(),
            product_repository=ProductSqlRepository(),
            stock_repository=StockSqlRepository(),
            warehouse_repository=WarehouseSqlRepository(),
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/order/all"""
        orders = self._service.list_orders()
        return Response([order.model_dump(mode="json") for order in orders])

    def retrieve(self, request: Request, order_id: str) -> Response:
        """GET /api/v1/order/{order_id}"""
        try:
            order = self._service.get_order(order_id)
        except OrderNotFound as exc:
            return error_response(exc)
        return Response(order.model_dump(mode="json"))

    # ------------------------------------------------------------------
    # Create / Delete
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/order/add

        The status is always ``open``; a supplied status is ignored.
        """
        serializer = CreateOrderSerializer(data=_body(request))
        serializer.is_valid(raise_exception=True)
        dto = CreateOrderDTO(order_date=serializer.validated_data.get("order_date"))
        order = self._service.create_order(dto)
        return Response(order.model_dump(mode="json"))

    def destroy(self, request: Request, order_id: str) -> Response:
        """DELETE /api/v1/order/delete/{order_id}"""
        try:
            self._service.delete_order(order_id)
        except (OrderNotFound, OrderClosed) as exc:
            return error_response(exc)
        return Response({"detail": f"Order {order_id} deleted."})

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    def add_position(self, request: Request, order_id: str) -> Response:
        """POST /api/v1/order/{order_id}/positions"""
        serializer = AddPositionSerializer(data=_body(request))
        serializer.is_valid(raise_exception=True)
        dto = AddPositionDTO(**serializer.validated_data)
        try:
            position = self._service.add_position(order_id, dto)
        except (OrderNotFound, OrderClosed, ProductNotFound) as exc:
            return error_response(exc)
        return Response(position.model_dump(mode="json"))

    def delete_position(self, request: Request, order_id: str, position_id: str) -> Response:
        """DELETE /api/v1/order/delete/{order_id}/position/{position_id}"""
        try:
            self._service.delete_position(order_id, position_id)
        except (OrderNotFound, OrderClosed, PositionNotFound) as exc:
            return error_response(exc)
        return Response({"detail": f"Position {position_id} deleted."})

    # ------------------------------------------------------------------
    # Close
    # ------------------------------------------------------------------

    def close(self, request: Request, order_id: str) -> Response:
        """PUT /api/v1/order/close/{order_id}

        Deducts the ordered quantities from stock and closes the order.
        """
        try:
            order = self._service.close_order(order_id)
        except (OrderNotFound, OrderAlreadyClosed, InsufficientStock) as exc:
            return error_response(exc)
        return Response(order.model_dump(mode="json"))
