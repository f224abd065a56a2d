import unittest
import uuid
from decimal import Decimal
from types import SimpleNamespace

from django.db import OperationalError

from apps.catalog.services import CatalogLookupService
from apps.common.errors import ProductNotFoundError, StorageFailureError


class FakeCache:
    def __init__(self):
        self.store = {}
        self.sets = 0

    def get(self, key):
        return self.store.get(key)

    def set(self, key, value, timeout=None):
        self.sets += 1
        self.store[key] = value


def make_product(name, price, category=None, is_available=True):
    return SimpleNamespace(
        product_id=uuid.uuid4(),
        name=name,
        description="",
        price=Decimal(price),
        stock_quantity=3,
        category=category,
        is_available=is_available,
    )


class FakeProductRepository:
    def __init__(self, products):
        self.products = {p.product_id: p for p in products}
        self.list_calls = 0

    def get(self, **filters):
        return self.products.get(filters.get("product_id"))

    def exists(self, **filters):
        return filters.get("product_id") in self.products

    def list_available(self, category=None):
        self.list_calls += 1
        return [
            p
            for p in self.products.values()
            if p.is_available and (not category or p.category == category)
        ]

    def get_price(self, product_id):
        product = self.products.get(product_id)
        return product.price if product else None


class CatalogLookupServiceTests(unittest.TestCase):
    def setUp(self):
        self.widget = make_product("Widget", "9.99", category="tools")
        self.gizmo = make_product("Gizmo", "20.00", category="toys")
        self.hidden = make_product("Hidden", "1.00", is_available=False)
        self.repo = FakeProductRepository([self.widget, self.gizmo, self.hidden])
        self.cache = FakeCache()
        self.service = CatalogLookupService(self.repo, self.cache)

    def test_get_price(self):
        self.assertEqual(self.service.get_price(self.widget.product_id), Decimal("9.99"))

    def test_get_price_unknown_product(self):
        with self.assertRaises(ProductNotFoundError) as ctx:
            self.service.get_price(uuid.uuid4())
        self.assertEqual(ctx.exception.code, "NOT_FOUND")

    def test_get_price_is_never_cached(self):
        self.service.get_price(self.widget.product_id)
        self.widget.price = Decimal("11.00")
        self.assertEqual(self.service.get_price(self.widget.product_id), Decimal("11.00"))
        self.assertEqual(self.cache.sets, 0)

    def test_get_product(self):
        dto = self.service.get_product(self.gizmo.product_id)
        self.assertEqual(dto.name, "Gizmo")
        with self.assertRaises(ProductNotFoundError):
            self.service.get_product(uuid.uuid4())

    def test_product_exists(self):
        self.assertTrue(self.service.product_exists(self.widget.product_id))
        self.assertFalse(self.service.product_exists(uuid.uuid4()))

    def test_list_products_uses_cache(self):
        first = self.service.list_products()
        second = self.service.list_products()
        self.assertEqual(len(first), 2)
        self.assertEqual(first, second)
        self.assertEqual(self.repo.list_calls, 1)
        self.assertIn("products:list:all", self.cache.store)

    def test_list_products_by_category(self):
        result = self.service.list_products("toys")
        self.assertEqual([p.name for p in result], ["Gizmo"])
        self.assertIn("products:list:toys", self.cache.store)

    def test_disable_cache(self):
        service = CatalogLookupService(self.repo, self.cache, disable_cache=True)
        service.list_products()
        service.list_products()
        self.assertEqual(self.repo.list_calls, 2)
        self.assertEqual(self.cache.store, {})

    def test_storage_failure(self):
        def boom(product_id):
            raise OperationalError("db down")

        self.repo.get_price = boom
        with self.assertRaises(StorageFailureError):
            self.service.get_price(self.widget.product_id)
