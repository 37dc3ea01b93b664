"""Order URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.orders.views import OrderViewSet

urlpatterns = [
    path("all", OrderViewSet.as_view({"get": "list"}), name="order-list"),
    path("add", OrderViewSet.as_view({"post": "create"}), name="order-create"),
    path(
        "close/<str:order_id>",
        OrderViewSet.as_view({"put": "close"}),
        name="order-close",
    ),
    path(
        "delete/<str:order_id>/position/<str:position_id>",
        OrderViewSet.as_view({"delete": "delete_position"}),
        name="order-delete-position",
    ),
    path(
        "delete/<str:order_id>",
        OrderViewSet.as_view({"delete": "destroy"}),
        name="order-delete",
    ),
    path(
        "<str:order_id>/positions",
        OrderViewSet.as_view({"post": "add_position"}),
        name="order-add-position",
    ),
    path("<str:order_id>", OrderViewSet.as_view({"get": "retrieve"}), name="order-detail"),
]
