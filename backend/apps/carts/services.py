from __future__ import annotations

from typing import Any, Dict, List

from apps.common import get_logger
from apps.common.errors import (
    CartNotFoundError,
    InvalidQuantityError,
    ProductNotFoundError,
)
from apps.common.unit_of_work import storage_errors, unit_of_work
from .commands import AddItemCommand
from .dtos import CartContentsDTO, CartDTO, CartItemDTO, CartLineDTO
from .protocols import (
    CartItemRepositoryProtocol,
    CartMapperProtocol,
    CartRepositoryProtocol,
    ProductLookupProtocol,
)

logger = get_logger(__name__).bind(component="carts", layer="service")


class CartService:
    """
    Owns cart lifecycle and line aggregation.

    Prices returned from here are the live catalog prices and are for display
    only; checkout re-reads them inside its own transaction.
    """

    def __init__(
        self,
        carts: CartRepositoryProtocol,
        cart_items: CartItemRepositoryProtocol,
        catalog: ProductLookupProtocol,
        cart_mapper: CartMapperProtocol,
    ):
        self.carts = carts
        self.cart_items = cart_items
        self.catalog = catalog
        self.cart_mapper = cart_mapper
        self.logger = logger.bind(service="CartService")

    def get_or_create_cart(self, user_id: int) -> CartDTO:
        self.logger.debug("Ensuring cart exists", user_id=user_id)
        with storage_errors("get_or_create_cart", user_id=user_id):
            cart, created = self.carts.get_or_create_for_user(user_id)
        if created:
            self.logger.info("Cart created", user_id=user_id, cart_id=cart.cart_id)
        return self.cart_mapper.to_dto(cart)

    def list_cart_contents(self, cart_id) -> List[CartLineDTO]:
        self.logger.debug("Listing cart contents", cart_id=cart_id)
        with storage_errors("list_cart_contents", cart_id=cart_id):
            if not self.carts.exists(cart_id=cart_id):
                raise CartNotFoundError(details={"cartId": str(cart_id)})
            items = self.cart_items.list_with_products(cart_id)
        return self.cart_mapper.lines_to_dto(items)

    def get_cart_for_user(self, user_id: int) -> CartContentsDTO:
        """Get-or-create the user's cart and return it with its display lines."""
        with storage_errors("get_cart_for_user", user_id=user_id):
            cart, created = self.carts.get_or_create_for_user(user_id)
            items = self.cart_items.list_with_products(cart.cart_id)
        if created:
            self.logger.info("Cart created", user_id=user_id, cart_id=cart.cart_id)
        contents = self.cart_mapper.contents_to_dto(cart, items)
        self.logger.debug(
            "Resolved cart contents",
            user_id=user_id,
            cart_id=cart.cart_id,
            lines=len(contents.lines),
        )
        return contents

    def add_item(self, cart_id, product_id, quantity: int) -> CartItemDTO:
        """
        Merge ``quantity`` units of a product into the cart: an existing line is
        incremented in place, otherwise a new line is inserted.
        """
        command = AddItemCommand(product_id=product_id, quantity=quantity)
        self.logger.info(
            "Adding item to cart",
            cart_id=cart_id,
            product_id=command.product_id,
            quantity=command.quantity,
        )
        with unit_of_work("add_item", cart_id=cart_id):
            if not self.carts.exists(cart_id=cart_id):
                self.logger.warning("Add item failed: cart not found", cart_id=cart_id)
                raise CartNotFoundError(details={"cartId": str(cart_id)})
            if not self.catalog.product_exists(command.product_id):
                self.logger.warning(
                    "Add item failed: product not found",
                    cart_id=cart_id,
                    product_id=command.product_id,
                )
                raise ProductNotFoundError(
                    details={"productId": str(command.product_id)}
                )
            item = self.cart_items.increment_or_create(
                cart_id, command.product_id, command.quantity
            )
            if item is None:
                self.logger.warning(
                    "Add item failed: line quantity limit reached",
                    cart_id=cart_id,
                    product_id=command.product_id,
                    quantity=command.quantity,
                )
                raise InvalidQuantityError(
                    "quantity would exceed the per-line limit",
                    details={"quantity": command.quantity},
                )
            self.carts.touch(cart_id)
        self.logger.debug(
            "Cart line updated",
            cart_id=cart_id,
            product_id=command.product_id,
            quantity=item.quantity,
        )
        return self.cart_mapper.item_to_dto(item)

    def add_item_for_user(self, user_id: int, payload: Dict[str, Any]) -> CartContentsDTO:
        command = AddItemCommand.from_raw(payload)
        cart = self.get_or_create_cart(user_id)
        self.add_item(cart.cart_id, command.product_id, command.quantity)
        return self.get_cart_for_user(user_id)
