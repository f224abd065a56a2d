from decimal import Decimal
from typing import Iterable, List

from .dtos import CartContentsDTO, CartDTO, CartItemDTO, CartLineDTO
from .models import Cart, CartItem


class CartMapper:
    def to_dto(self, cart: Cart) -> CartDTO:
        return CartDTO(
            cart_id=cart.cart_id,
            user_id=cart.user_id,
            created_at=cart.created_at,
            updated_at=cart.updated_at,
        )

    def item_to_dto(self, item: CartItem) -> CartItemDTO:
        return CartItemDTO(
            cart_item_id=item.cart_item_id,
            cart_id=item.cart_id,
            product_id=item.product_id,
            quantity=item.quantity,
            added_at=item.added_at,
        )

    def line_to_dto(self, item: CartItem) -> CartLineDTO:
        return CartLineDTO(
            item=self.item_to_dto(item),
            product_name=item.product.name,
            product_price=item.product.price,
        )

    def lines_to_dto(self, items: Iterable[CartItem]) -> List[CartLineDTO]:
        return [self.line_to_dto(i) for i in items]

    def contents_to_dto(self, cart: Cart, items: Iterable[CartItem]) -> CartContentsDTO:
        lines = self.lines_to_dto(items)
        subtotal = sum(
            (line.product_price * line.item.quantity for line in lines), Decimal("0.00")
        )
        return CartContentsDTO(cart=self.to_dto(cart), lines=lines, subtotal=subtotal)
