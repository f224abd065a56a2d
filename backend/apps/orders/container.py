from __future__ import annotations

from apps.carts.repositories import CartItemRepository, CartRepository

from .mappers import OrderMapper
from .repositories import OrderDetailRepository, OrderRepository
from .services import CheckoutService, OrderLedgerService


def build_checkout_service() -> CheckoutService:
    return CheckoutService(
        carts=CartRepository(),
        cart_items=CartItemRepository(),
        orders=OrderRepository(),
        order_details=OrderDetailRepository(),
        order_mapper=OrderMapper(),
    )


def build_order_ledger_service() -> OrderLedgerService:
    return OrderLedgerService(orders=OrderRepository(), order_mapper=OrderMapper())
