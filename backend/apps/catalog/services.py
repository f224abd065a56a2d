from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from apps.common import get_logger
from apps.common.errors import ProductNotFoundError
from apps.common.unit_of_work import storage_errors
from .dtos import ProductDTO
from .mappers import ProductMapper
from .protocols import CacheBackendProtocol, ProductRepositoryProtocol

logger = get_logger(__name__).bind(component="catalog", layer="service")


class CatalogLookupService:
    """
    Read-only view of the product catalog.

    ``get_price`` is the authoritative lookup and always hits the database.
    ``list_products`` backs the storefront listing and may serve cached data.
    """

    def __init__(
        self,
        products: ProductRepositoryProtocol,
        cache_backend: CacheBackendProtocol,
        disable_cache: bool = False,
        cache_timeout: Optional[int] = None,
    ):
        self.products = products
        self.cache = cache_backend
        self.disable_cache = disable_cache
        self.cache_timeout = cache_timeout
        self.logger = logger.bind(service="CatalogLookupService")
        self._cache_prefix = "products:list"

    def _cache_key(self, category: Optional[str]) -> str:
        return f"{self._cache_prefix}:{category or 'all'}"

    def get_price(self, product_id) -> Decimal:
        """
        Authoritative current price, never cached. Checkout does not call this
        per line: it reads prices through the cart-item join inside its own
        transaction so every line is priced in one consistent read.
        """
        with storage_errors("get_price", product_id=product_id):
            price = self.products.get_price(product_id)
        if price is None:
            self.logger.info("Price lookup for missing product", product_id=product_id)
            raise ProductNotFoundError(details={"productId": str(product_id)})
        return price

    def get_product(self, product_id) -> ProductDTO:
        self.logger.debug("Fetching product", product_id=product_id)
        with storage_errors("get_product", product_id=product_id):
            product = self.products.get(product_id=product_id)
        if not product:
            self.logger.info("Product not found", product_id=product_id)
            raise ProductNotFoundError(details={"productId": str(product_id)})
        return ProductMapper.to_dto(product)

    def product_exists(self, product_id) -> bool:
        with storage_errors("product_exists", product_id=product_id):
            return self.products.exists(product_id=product_id)

    def list_products(self, category: Optional[str] = None) -> List[ProductDTO]:
        self.logger.debug(
            "Listing products",
            category=category,
            cache_enabled=not self.disable_cache,
        )
        if self.disable_cache:
            return self._load_products(category)
        key = self._cache_key(category)
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug("Product list cache hit", cache_key=key)
            return cached
        self.logger.debug("Product list cache miss", cache_key=key)
        data = self._load_products(category)
        self.cache.set(key, data, timeout=self.cache_timeout)
        return data

    def _load_products(self, category: Optional[str]) -> List[ProductDTO]:
        with storage_errors("list_products", category=category):
            return ProductMapper.many_to_dto(self.products.list_available(category))
