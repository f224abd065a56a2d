from rest_framework import serializers


class ProductReadSerializer(serializers.Serializer):
    # Mirrors ProductDTO
    product_id = serializers.UUIDField()
    name = serializers.CharField()
    description = serializers.CharField(allow_blank=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    stock_quantity = serializers.IntegerField()
    category = serializers.CharField(allow_null=True)
    is_available = serializers.BooleanField()
