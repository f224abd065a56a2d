from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, Tuple, TYPE_CHECKING

from .models import Order, OrderDetail

if TYPE_CHECKING:
    from apps.carts.models import Cart, CartItem
    from .dtos import OrderDTO


class OrderRepositoryProtocol(Protocol):
    def create(self, **data) -> Order:
        ...

    def update(self, obj: Order, **data) -> Order:
        ...

    def list_for_user(self, user_id: int) -> List[Order]:
        ...

    def list_all(self) -> List[Order]:
        ...

    def get_with_details(self, order_id, user_id: Optional[int] = None) -> Optional[Order]:
        ...

    def lock(self, order_id) -> Optional[Order]:
        ...


class OrderDetailRepositoryProtocol(Protocol):
    def create_lines(self, order_id, lines: Iterable[Tuple]) -> List[OrderDetail]:
        ...


class CheckoutCartRepositoryProtocol(Protocol):
    def lock_for_user(self, user_id: int) -> Optional["Cart"]:
        ...


class CheckoutCartItemRepositoryProtocol(Protocol):
    def list_with_products(self, cart_id) -> List["CartItem"]:
        ...

    def delete_for_cart(self, cart_id) -> int:
        ...


class OrderMapperProtocol(Protocol):
    def to_dto(
        self, order: Order, details: Optional[Iterable[OrderDetail]] = None
    ) -> "OrderDTO":
        ...

    def many_to_dto(self, orders: Iterable[Order]) -> List["OrderDTO"]:
        ...
