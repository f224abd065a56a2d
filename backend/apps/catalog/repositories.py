from decimal import Decimal
from typing import Optional

from apps.common.repository import GenericRepository
from .models import Product


class ProductRepository(GenericRepository[Product]):
    def __init__(self):
        super().__init__(Product)

    def list_available(self, category: Optional[str] = None):
        qs = self.model.objects.filter(is_available=True)
        if category:
            qs = qs.filter(category=category)
        return qs.order_by("name", "product_id")

    def get_price(self, product_id) -> Optional[Decimal]:
        """Current unit price, or None when the product does not exist."""
        return (
            self.model.objects.filter(product_id=product_id)
            .values_list("price", flat=True)
            .first()
        )
