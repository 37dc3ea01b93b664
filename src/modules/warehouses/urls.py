"""Warehouse URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.warehouses.views import WarehouseViewSet

urlpatterns = [
    path("all", WarehouseViewSet.as_view({"get": "list"}), name="warehouse-list"),
    path(
        "product/<str:product_id>/total",
        WarehouseViewSet.as_view({"get": "product_total"}),
        name="warehouse-product-total",
    ),
    path(
        "add/product/<str:product_id>/warehouse/<int:warehouse_id>",
        WarehouseViewSet.as_view({"post": "add_quantity"}),
        name="warehouse-add-quantity",
    ),
    path(
        "reduce/product/<str:product_id>/warehouse/<int:warehouse_id>",
        WarehouseViewSet.as_view({"post": "reduce_quantity"}),
        name="warehouse-reduce-quantity",
    ),
    path(
        "<int:warehouse_id>",
        WarehouseViewSet.as_view({"get": "retrieve"}),
        name="warehouse-detail",
    ),
]
