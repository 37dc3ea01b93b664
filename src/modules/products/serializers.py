"""Product DRF serializers for API output.

Input validation lives in the Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource."""

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "unit",
            "price",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
