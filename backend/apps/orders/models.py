import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone

# Largest value total_amount (max_digits=12, decimal_places=2) can store.
MAX_ORDER_TOTAL = Decimal("9999999999.99")


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    CONFIRMED = "confirmed", "Confirmed"
    SHIPPED = "shipped", "Shipped"

    @classmethod
    def rank(cls, value) -> int:
        """Position along pending -> confirmed -> shipped."""
        return cls.values.index(str(value))


class Order(models.Model):
    """
    A completed purchase. Every column except ``status`` is written once at
    checkout; ``total_amount`` always equals the sum of the detail line totals.
    """

    order_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="orders"
    )
    order_date = models.DateTimeField(default=timezone.now)
    status = models.CharField(
        max_length=16, choices=OrderStatus.choices, default=OrderStatus.PENDING
    )
    shipping_address = models.TextField()
    created_at = models.DateTimeField(default=timezone.now)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        db_table = "orders"
        indexes = [
            models.Index(fields=["user", "-created_at"], name="order_user_created_idx"),
            models.Index(fields=["-created_at"], name="order_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(status__in=OrderStatus.values),
                name="order_status_valid",
            ),
        ]

    def __str__(self):
        return f"Order {self.order_id} ({self.status})"


class OrderDetail(models.Model):
    order_detail_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="details")
    product = models.ForeignKey(
        "catalog.Product", on_delete=models.PROTECT, related_name="+"
    )
    quantity = models.IntegerField()
    # Unit price at checkout time; never follows later catalog changes.
    price_per_unit = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        db_table = "order_details"
        constraints = [
            models.UniqueConstraint(
                fields=["order", "product"], name="order_detail_unique_product"
            ),
        ]

    @property
    def line_total(self):
        return self.price_per_unit * self.quantity
