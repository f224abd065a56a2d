from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Optional, Protocol

from .models import Product


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional[Product]:
        ...

    def exists(self, **filters) -> bool:
        ...

    def list_available(self, category: Optional[str] = None) -> Iterable[Product]:
        ...

    def get_price(self, product_id) -> Optional[Decimal]:
        ...


class CacheBackendProtocol(Protocol):
    def get(self, key: str) -> Any:
        ...

    def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        ...
