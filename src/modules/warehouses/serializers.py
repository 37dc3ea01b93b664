"""Warehouse DRF serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.core.models import MAX_QUANTITY
from modules.warehouses.models import Warehouse


class QuantitySerializer(serializers.Serializer):
    """Stock change body: ``{"quantity": n}``.

    The sign is checked by the service so that a non-positive amount
    surfaces as ``invalid_quantity``.
    """

    quantity = serializers.IntegerField(max_value=MAX_QUANTITY)

    @classmethod
    def from_body(cls, data) -> "QuantitySerializer":
        """Accept either the object form or a bare JSON integer."""
        if not isinstance(data, dict):
            data = {"quantity": data}
        return cls(data=data)


class WarehouseSerializer(serializers.ModelSerializer):
    class Meta:
        model = Warehouse
        fields = ["id", "quantity", "active"]
        read_only_fields = fields


class ProductTotalSerializer(serializers.Serializer):
    product_id = serializers.CharField()
    total_quantity = serializers.IntegerField()
