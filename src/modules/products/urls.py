"""Product URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.products.views import ProductViewSet

urlpatterns = [
    path("all", ProductViewSet.as_view({"get": "list"}), name="product-list"),
    path("add", ProductViewSet.as_view({"post": "create"}), name="product-create"),
    path(
        "update/<str:product_id>",
        ProductViewSet.as_view({"put": "update"}),
        name="product-update",
    ),
    path(
        "delete/<str:product_id>",
        ProductViewSet.as_view({"delete": "destroy"}),
        name="product-delete",
    ),
    path("<str:product_id>", ProductViewSet.as_view({"get": "retrieve"}), name="product-detail"),
]
