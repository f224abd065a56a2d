from rest_framework import serializers

from .models import OrderStatus


class OrderDetailSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField()
    price_per_unit = serializers.DecimalField(max_digits=10, decimal_places=2)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2)


class OrderSerializer(serializers.Serializer):
    # Mirrors OrderDTO
    order_id = serializers.UUIDField()
    user_id = serializers.IntegerField()
    order_date = serializers.DateTimeField()
    status = serializers.ChoiceField(choices=OrderStatus.choices)
    shipping_address = serializers.CharField()
    created_at = serializers.DateTimeField()
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    lines = OrderDetailSerializer(many=True)


class CheckoutSerializer(serializers.Serializer):
    shipping_address = serializers.CharField(trim_whitespace=False)


class OrderStatusUpdateSerializer(serializers.Serializer):
    # Parsed by the ledger so unknown values get the same error everywhere.
    status = serializers.CharField(
        help_text="One of: pending, confirmed, shipped. Status only moves forward."
    )
