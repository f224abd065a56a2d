"""Error taxonomy shared by the cart, checkout and order services.

Each error carries a machine-readable ``code`` that the API layer maps to an
HTTP status (see ``apps.api.utils.ERROR_STATUS_MAP``) and an optional
``details`` mapping that is echoed to clients.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class CoreError(Exception):
    code = "SERVER_ERROR"
    default_message = "Something went wrong"

    def __init__(
        self, message: Optional[str] = None, *, details: Optional[Dict[str, Any]] = None
    ):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class NotFoundError(CoreError):
    """A referenced cart, order or product does not exist."""

    code = "NOT_FOUND"
    default_message = "Resource not found"


class CartNotFoundError(NotFoundError):
    default_message = "Cart not found"


class OrderNotFoundError(NotFoundError):
    default_message = "Order not found"


class ProductNotFoundError(NotFoundError):
    default_message = "Product not found"


class EmptyCartError(CoreError):
    """Checkout was attempted against a cart without items."""

    code = "EMPTY_CART"
    default_message = "Cart is empty"


class ValidationFailedError(CoreError):
    code = "VALIDATION_ERROR"
    default_message = "Validation failed"


class InvalidQuantityError(ValidationFailedError):
    default_message = "quantity must be a positive integer"


class InvalidOrderStatusError(ValidationFailedError):
    default_message = "status must be one of: pending, confirmed, shipped"


class OrderTotalTooLargeError(ValidationFailedError):
    default_message = "Order total exceeds the largest supported amount"


class InvalidStatusTransitionError(CoreError):
    code = "INVALID_TRANSITION"
    default_message = "Order status can only move forward"


class StorageFailureError(CoreError):
    """Any persistence failure. Never retried here; the caller owns retry policy."""

    code = "SERVER_ERROR"
    default_message = "Storage operation failed"


class UnauthorizedError(CoreError):
    code = "UNAUTHORIZED"
    default_message = "Authentication required"


__all__ = [
    "CoreError",
    "NotFoundError",
    "CartNotFoundError",
    "OrderNotFoundError",
    "ProductNotFoundError",
    "EmptyCartError",
    "ValidationFailedError",
    "InvalidQuantityError",
    "InvalidOrderStatusError",
    "OrderTotalTooLargeError",
    "InvalidStatusTransitionError",
    "StorageFailureError",
    "UnauthorizedError",
]
