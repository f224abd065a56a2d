from typing import Any

from apps.common.errors import InvalidOrderStatusError, ValidationFailedError
from .models import OrderStatus


def parse_status(raw: Any) -> OrderStatus:
    """Map user input onto the closed status set; unknown values are rejected."""
    if not isinstance(raw, str):
        raise InvalidOrderStatusError(details={"status": raw})
    value = raw.strip().lower()
    if value not in OrderStatus.values:
        raise InvalidOrderStatusError(details={"status": raw})
    return OrderStatus(value)


def parse_shipping_address(raw: Any) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationFailedError(
            "shipping_address is required", details={"shipping_address": raw}
        )
    return raw
