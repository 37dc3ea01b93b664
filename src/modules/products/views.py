"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into appropriate
HTTP status codes; the view never swallows generic exceptions.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import error_response
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import ProductInOrder, ProductNotFound
from modules.products.models import Product
from modules.products.repositories import ProductSqlRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService
from modules.warehouses.repositories import StockSqlRepository, WarehouseSqlRepository


def _invalid(exc: Exception) -> Response:
    return Response(
        {"detail": str(exc), "code": "invalid"},
        status=status.HTTP_400_BAD_REQUEST,
    )


class ProductViewSet(GenericViewSet):
    """ViewSet for Product CRUD operations.

    Does **not** extend ``ModelViewSet``: all database access goes
    through the service/repository layer.
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(
            repository=ProductSqlRepository(),
            stock_repository=StockSqlRepository(),
            warehouse_repository=WarehouseSqlRepository(),
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/product/all"""
        products = self._service.list_products()
        return Response(ProductSerializer(products, many=True).data)

    def retrieve(self, request: Request, product_id: str) -> Response:
        """GET /api/v1/product/{product_id}"""
        try:
            product = self._service.get_product(product_id)
        except ProductNotFound as exc:
            return error_response(exc)
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/product/add"""
        data = request.data if isinstance(request.data, dict) else {}
        try:
            dto = CreateProductDTO(
                name=data.get("name", ""),
                unit=data.get("unit", ""),
                price=data.get("price"),
            )
        except (PydanticValidationError, ValueError) as exc:
            return _invalid(exc)

        product = self._service.create_product(dto)
        out = ProductSerializer(product)
        return Response(out.data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, product_id: str) -> Response:
        """PUT /api/v1/product/update/{product_id}"""
        data = request.data if isinstance(request.data, dict) else {}
        try:
            dto = UpdateProductDTO(
                name=data.get("name"),
                unit=data.get("unit"),
                price=data.get("price"),
            )
        except (PydanticValidationError, ValueError) as exc:
            return _invalid(exc)

        try:
            product = self._service.update_product(product_id, dto)
        except ProductNotFound as exc:
            return error_response(exc)
        return Response(ProductSerializer(product).data)

    def destroy(self, request: Request, product_id: str) -> Response:
        """DELETE /api/v1/product/delete/{product_id}"""
        try:
            self._service.delete_product(product_id)
        except (ProductNotFound, ProductInOrder) as exc:
            return error_response(exc)
        return Response({"detail": f"Product {product_id} deleted."})
