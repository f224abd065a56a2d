from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from django.utils import timezone

from apps.common import get_logger
from apps.common.errors import (
    CartNotFoundError,
    EmptyCartError,
    InvalidStatusTransitionError,
    OrderNotFoundError,
    OrderTotalTooLargeError,
)
from apps.common.unit_of_work import storage_errors, unit_of_work
from .commands import parse_shipping_address, parse_status
from .dtos import OrderDTO
from .models import MAX_ORDER_TOTAL, OrderStatus
from .protocols import (
    CheckoutCartItemRepositoryProtocol,
    CheckoutCartRepositoryProtocol,
    OrderDetailRepositoryProtocol,
    OrderMapperProtocol,
    OrderRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="orders", layer="service")


class CheckoutService:
    """
    Turns a user's cart into an order.

    The whole conversion runs in one transaction with the cart row locked:
    read the items with their current prices, price the order, write the order
    and its detail lines, then empty the cart. Any failure leaves the cart and
    the order tables exactly as they were.
    """

    def __init__(
        self,
        carts: CheckoutCartRepositoryProtocol,
        cart_items: CheckoutCartItemRepositoryProtocol,
        orders: OrderRepositoryProtocol,
        order_details: OrderDetailRepositoryProtocol,
        order_mapper: OrderMapperProtocol,
    ):
        self.carts = carts
        self.cart_items = cart_items
        self.orders = orders
        self.order_details = order_details
        self.order_mapper = order_mapper
        self.logger = logger.bind(service="CheckoutService")

    def checkout(self, user_id: int, shipping_address: str) -> OrderDTO:
        shipping_address = parse_shipping_address(shipping_address)
        self.logger.info("Checkout started", user_id=user_id)
        with unit_of_work("checkout", user_id=user_id):
            # Concurrent checkouts of the same cart queue up here.
            cart = self.carts.lock_for_user(user_id)
            if cart is None:
                self.logger.warning("Checkout failed: no cart", user_id=user_id)
                raise CartNotFoundError(details={"userId": user_id})

            items = self.cart_items.list_with_products(cart.cart_id)
            if not items:
                self.logger.info(
                    "Checkout rejected: cart is empty",
                    user_id=user_id,
                    cart_id=cart.cart_id,
                )
                raise EmptyCartError(details={"cartId": str(cart.cart_id)})

            snapshot = [(i.product_id, i.quantity, i.product.price) for i in items]
            total = sum(
                (price * quantity for _, quantity, price in snapshot), Decimal("0.00")
            )
            if total > MAX_ORDER_TOTAL:
                self.logger.warning(
                    "Checkout rejected: total too large",
                    user_id=user_id,
                    cart_id=cart.cart_id,
                    total_amount=total,
                )
                raise OrderTotalTooLargeError(details={"totalAmount": str(total)})
            now = timezone.now()
            order = self.orders.create(
                user_id=user_id,
                order_date=now,
                created_at=now,
                status=OrderStatus.PENDING,
                shipping_address=shipping_address,
                total_amount=total,
            )
            details = self.order_details.create_lines(order.order_id, snapshot)
            cleared = self.cart_items.delete_for_cart(cart.cart_id)
        self.logger.info(
            "Checkout completed",
            user_id=user_id,
            cart_id=cart.cart_id,
            order_id=order.order_id,
            lines=len(details),
            cleared=cleared,
            total_amount=total,
        )
        return self.order_mapper.to_dto(order, details)


class OrderLedgerService:
    """Read access to placed orders and their forward-only status changes."""

    def __init__(self, orders: OrderRepositoryProtocol, order_mapper: OrderMapperProtocol):
        self.orders = orders
        self.order_mapper = order_mapper
        self.logger = logger.bind(service="OrderLedgerService")

    def list_orders_for_user(self, user_id: int) -> List[OrderDTO]:
        self.logger.debug("Listing orders for user", user_id=user_id)
        with storage_errors("list_orders_for_user", user_id=user_id):
            orders = self.orders.list_for_user(user_id)
            return self.order_mapper.many_to_dto(orders)

    def list_all_orders(self) -> List[OrderDTO]:
        # Callers have already established the requester is privileged.
        self.logger.debug("Listing all orders")
        with storage_errors("list_all_orders"):
            return self.order_mapper.many_to_dto(self.orders.list_all())

    def get_order(self, order_id, user_id: Optional[int] = None) -> OrderDTO:
        """Fetch one order; with ``user_id`` only that user's orders are visible."""
        with storage_errors("get_order", order_id=order_id):
            order = self.orders.get_with_details(order_id, user_id=user_id)
            if order is None:
                self.logger.info("Order not found", order_id=order_id, user_id=user_id)
                raise OrderNotFoundError(details={"orderId": str(order_id)})
            return self.order_mapper.to_dto(order)

    def update_status(self, order_id, new_status) -> OrderDTO:
        status = parse_status(new_status)
        with unit_of_work("update_status", order_id=order_id):
            order = self.orders.lock(order_id)
            if order is None:
                self.logger.info("Status update for missing order", order_id=order_id)
                raise OrderNotFoundError(details={"orderId": str(order_id)})
            current = OrderStatus(order.status)
            if status == current:
                self.logger.debug(
                    "Status unchanged", order_id=order_id, status=current.value
                )
            elif OrderStatus.rank(status) < OrderStatus.rank(current):
                self.logger.warning(
                    "Rejected backward status transition",
                    order_id=order_id,
                    current=current.value,
                    requested=status.value,
                )
                raise InvalidStatusTransitionError(
                    details={"from": current.value, "to": status.value}
                )
            else:
                self.orders.update(order, status=status)
                self.logger.info(
                    "Order status updated",
                    order_id=order_id,
                    previous=current.value,
                    status=status.value,
                )
        return self.get_order(order_id)
