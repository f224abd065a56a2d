from __future__ import annotations

from apps.catalog.container import build_catalog_service

from .mappers import CartMapper
from .repositories import CartItemRepository, CartRepository
from .services import CartService


def build_cart_service() -> CartService:
    return CartService(
        carts=CartRepository(),
        cart_items=CartItemRepository(),
        catalog=build_catalog_service(disable_cache=True),
        cart_mapper=CartMapper(),
    )
