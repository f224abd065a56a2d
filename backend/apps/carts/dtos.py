from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID


@dataclass
class CartDTO:
    cart_id: UUID
    user_id: Optional[int]
    created_at: datetime
    updated_at: datetime


@dataclass
class CartItemDTO:
    cart_item_id: UUID
    cart_id: UUID
    product_id: UUID
    quantity: int
    added_at: datetime


@dataclass
class CartLineDTO:
    # product_name/product_price are live catalog values, for display only
    item: CartItemDTO
    product_name: str
    product_price: Decimal


@dataclass
class CartContentsDTO:
    cart: CartDTO
    lines: List[CartLineDTO] = field(default_factory=list)
    subtotal: Decimal = Decimal("0.00")
