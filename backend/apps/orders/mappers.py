from typing import Iterable, List, Optional

from .dtos import OrderDetailDTO, OrderDTO
from .models import Order, OrderDetail


class OrderMapper:
    def detail_to_dto(self, detail: OrderDetail) -> OrderDetailDTO:
        return OrderDetailDTO(
            product_id=detail.product_id,
            quantity=detail.quantity,
            price_per_unit=detail.price_per_unit,
            line_total=detail.price_per_unit * detail.quantity,
        )

    def to_dto(
        self, order: Order, details: Optional[Iterable[OrderDetail]] = None
    ) -> OrderDTO:
        if details is None:
            details = order.details.all()
        return OrderDTO(
            order_id=order.order_id,
            user_id=order.user_id,
            order_date=order.order_date,
            status=str(order.status),
            shipping_address=order.shipping_address,
            created_at=order.created_at,
            total_amount=order.total_amount,
            lines=[self.detail_to_dto(d) for d in details],
        )

    def many_to_dto(self, orders: Iterable[Order]) -> List[OrderDTO]:
        return [self.to_dto(o) for o in orders]
