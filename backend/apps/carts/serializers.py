from rest_framework import serializers

from .models import MAX_LINE_QUANTITY


class CartSerializer(serializers.Serializer):
    cart_id = serializers.UUIDField()
    user_id = serializers.IntegerField(allow_null=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class CartItemSerializer(serializers.Serializer):
    cart_item_id = serializers.UUIDField()
    cart_id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField()
    added_at = serializers.DateTimeField()


class CartLineSerializer(serializers.Serializer):
    item = CartItemSerializer()
    product_name = serializers.CharField()
    product_price = serializers.DecimalField(max_digits=10, decimal_places=2)


class CartContentsSerializer(serializers.Serializer):
    cart = CartSerializer()
    lines = CartLineSerializer(many=True)
    # Live prices; the order total is computed again at checkout.
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)


class CartItemWriteSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_LINE_QUANTITY)
