from typing import Iterable, List, Optional, Tuple

from django.db.models import QuerySet

from apps.common.repository import GenericRepository
from .models import Order, OrderDetail


class OrderRepository(GenericRepository[Order]):
    def __init__(self):
        super().__init__(Order)

    def _with_details(self) -> QuerySet:
        return self.model.objects.prefetch_related("details").order_by(
            "-created_at", "-order_date"
        )

    def list_for_user(self, user_id: int) -> List[Order]:
        return list(self._with_details().filter(user_id=user_id))

    def list_all(self) -> List[Order]:
        return list(self._with_details())

    def get_with_details(self, order_id, user_id: Optional[int] = None) -> Optional[Order]:
        qs = self._with_details().filter(order_id=order_id)
        if user_id is not None:
            qs = qs.filter(user_id=user_id)
        return qs.first()

    def lock(self, order_id) -> Optional[Order]:
        return self.get_for_update(order_id=order_id)


class OrderDetailRepository(GenericRepository[OrderDetail]):
    def __init__(self):
        super().__init__(OrderDetail)

    def create_lines(self, order_id, lines: Iterable[Tuple]) -> List[OrderDetail]:
        """Insert one detail row per ``(product_id, quantity, price_per_unit)``."""
        return self.model.objects.bulk_create(
            [
                self.model(
                    order_id=order_id,
                    product_id=product_id,
                    quantity=quantity,
                    price_per_unit=price,
                )
                for product_id, quantity, price in lines
            ]
        )
