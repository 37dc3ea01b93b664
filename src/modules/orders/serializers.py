"""Order DRF serializers for API input.

Serializers validate the request payloads at the Interface layer and
the views turn the validated data into Pydantic DTOs from ``dtos.py``.
Responses are rendered from the output DTOs.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.core.models import MAX_QUANTITY


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation payload; every field is optional."""

    order_date = serializers.DateField(required=False, allow_null=True)


class AddPositionSerializer(serializers.Serializer):
    """Validates a new position payload."""

    product_id = serializers.CharField(max_length=36)
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_QUANTITY)
