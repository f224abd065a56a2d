from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List
from uuid import UUID


@dataclass
class OrderDetailDTO:
    product_id: UUID
    quantity: int
    price_per_unit: Decimal
    line_total: Decimal


@dataclass
class OrderDTO:
    order_id: UUID
    user_id: int
    order_date: datetime
    status: str
    shipping_address: str
    created_at: datetime
    total_amount: Decimal
    lines: List[OrderDetailDTO] = field(default_factory=list)
