from dataclasses import dataclass
from typing import Any, Dict
from uuid import UUID

from apps.common.errors import InvalidQuantityError, ValidationFailedError
from .models import MAX_LINE_QUANTITY


def parse_quantity(raw: Any) -> int:
    """
    Accept integers in 1..MAX_LINE_QUANTITY (or their decimal string form);
    reject everything else.
    """
    if isinstance(raw, bool):
        raise InvalidQuantityError(details={"quantity": raw})
    if isinstance(raw, int):
        quantity = raw
    elif isinstance(raw, str) and raw.strip().isdecimal():
        quantity = int(raw.strip())
    else:
        raise InvalidQuantityError(details={"quantity": raw})
    if quantity < 1 or quantity > MAX_LINE_QUANTITY:
        raise InvalidQuantityError(details={"quantity": raw})
    return quantity


def parse_product_id(raw: Any) -> UUID:
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw))
    except (TypeError, ValueError):
        raise ValidationFailedError(
            "product_id must be a valid UUID", details={"product_id": raw}
        )


@dataclass(frozen=True)
class AddItemCommand:
    product_id: UUID
    quantity: int

    def __post_init__(self):
        # Construction is the only way in, so a command always holds a valid line.
        object.__setattr__(self, "product_id", parse_product_id(self.product_id))
        object.__setattr__(self, "quantity", parse_quantity(self.quantity))

    @staticmethod
    def from_raw(raw: Dict[str, Any]) -> "AddItemCommand":
        if not isinstance(raw, dict):
            raise ValidationFailedError("Payload must be an object")
        product_id = raw.get("product_id", raw.get("productId"))
        if product_id is None:
            raise ValidationFailedError(
                "product_id is required", details={"product_id": None}
            )
        return AddItemCommand(product_id=product_id, quantity=raw.get("quantity"))
