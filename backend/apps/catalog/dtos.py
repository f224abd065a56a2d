from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from uuid import UUID


@dataclass
class ProductDTO:
    product_id: UUID
    name: str
    description: str
    price: Decimal
    stock_quantity: int
    category: Optional[str]
    is_available: bool
