import uuid

from django.db import models
from django.utils import timezone


class Product(models.Model):
    """
    Catalog entry. Read-only for this service: prices are owned and edited by
    the catalog team, and orders copy the price at checkout rather than
    referencing it.
    """

    product_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(max_digits=10, decimal_places=2)
    stock_quantity = models.IntegerField(default=0)
    category = models.CharField(max_length=100, blank=True, null=True)
    is_available = models.BooleanField(default=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "products"
        indexes = [
            models.Index(fields=["name"], name="product_name_idx"),
            models.Index(fields=["category"], name="product_category_idx"),
        ]

    def __str__(self):
        return self.name
