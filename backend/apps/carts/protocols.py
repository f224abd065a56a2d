from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, Tuple, TYPE_CHECKING

from .models import Cart, CartItem

if TYPE_CHECKING:
    from .dtos import CartDTO, CartItemDTO, CartLineDTO


class CartRepositoryProtocol(Protocol):
    def exists(self, **filters) -> bool:
        ...

    def get_or_create_for_user(self, user_id: int) -> Tuple[Cart, bool]:
        ...

    def lock_for_user(self, user_id: int) -> Optional[Cart]:
        ...

    def touch(self, cart_id) -> None:
        ...


class CartItemRepositoryProtocol(Protocol):
    def list_with_products(self, cart_id) -> List[CartItem]:
        ...

    def increment_or_create(self, cart_id, product_id, quantity: int) -> Optional[CartItem]:
        ...

    def delete_for_cart(self, cart_id) -> int:
        ...


class ProductLookupProtocol(Protocol):
    def product_exists(self, product_id) -> bool:
        ...


class CartMapperProtocol(Protocol):
    def to_dto(self, cart: Cart) -> "CartDTO":
        ...

    def item_to_dto(self, item: CartItem) -> "CartItemDTO":
        ...

    def lines_to_dto(self, items: Iterable[CartItem]) -> List["CartLineDTO"]:
        ...
