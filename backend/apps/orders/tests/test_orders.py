from decimal import Decimal
from unittest.mock import patch

from django.db import DatabaseError
from rest_framework import status
from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import AccessToken

from apps.carts.models import Cart, CartItem
from apps.catalog.models import Product
from apps.common.errors import EmptyCartError, StorageFailureError
from apps.orders.container import build_checkout_service
from apps.orders.models import Order, OrderDetail
from apps.users.models import User


class OrderApiTestCase(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username="buyer", password="TestPass123", email="buyer@example.com"
        )
        self.other = User.objects.create_user(
            username="other", password="TestPass123", email="other@example.com"
        )
        self.admin = User.objects.create_user(
            username="admin", password="TestPass123", email="admin@example.com", is_staff=True
        )
        self.x = Product.objects.create(name="X", price=Decimal("9.99"))
        self.y = Product.objects.create(name="Y", price=Decimal("20.00"))
        self.z = Product.objects.create(name="Z", price=Decimal("5.00"))

    def _auth(self, user=None):
        token = AccessToken.for_user(user or self.user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

    def _add(self, product, quantity):
        res = self.client.post(
            "/api/cart/items/",
            {"product_id": str(product.product_id), "quantity": quantity},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        return res

    def _checkout(self, address="1 Main St"):
        return self.client.post(
            "/api/orders/", {"shipping_address": address}, format="json"
        )

    def _place_order(self, user=None):
        self._auth(user)
        self._add(self.y, 1)
        res = self._checkout()
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        return res.data["order_id"]


class TestCheckout(OrderApiTestCase):
    def test_merged_line_checks_out_at_snapshot_price(self):
        self._auth()
        self._add(self.x, 2)
        cart = self._add(self.x, 3)
        self.assertEqual(len(cart.data["lines"]), 1)
        self.assertEqual(cart.data["lines"][0]["item"]["quantity"], 5)
        self.assertEqual(cart.data["lines"][0]["product_price"], "9.99")

        res = self._checkout()
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["total_amount"], "49.95")
        self.assertEqual(res.data["status"], "pending")
        self.assertEqual(len(res.data["lines"]), 1)
        self.assertEqual(res.data["lines"][0]["quantity"], 5)
        self.assertEqual(res.data["lines"][0]["price_per_unit"], "9.99")
        self.assertEqual(CartItem.objects.count(), 0)
        self.assertTrue(Cart.objects.filter(user=self.user).exists())

    def test_two_products(self):
        self._auth()
        self._add(self.y, 1)
        self._add(self.z, 1)
        res = self._checkout()
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["total_amount"], "25.00")
        order = Order.objects.get(order_id=res.data["order_id"])
        self.assertEqual(order.details.count(), 2)
        self.assertEqual(
            sum(d.line_total for d in order.details.all()), order.total_amount
        )
        self.assertEqual(CartItem.objects.filter(cart__user=self.user).count(), 0)

    def test_empty_cart_is_rejected(self):
        self._auth()
        self.client.get("/api/cart/")
        res = self._checkout()
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "EMPTY_CART")
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(OrderDetail.objects.count(), 0)

    def test_checkout_without_cart_is_not_found(self):
        self._auth()
        res = self._checkout()
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["error"]["code"], "NOT_FOUND")

    def test_second_checkout_sees_empty_cart(self):
        self._place_order()
        res = self._checkout()
        self.assertEqual(res.data["error"]["code"], "EMPTY_CART")
        self.assertEqual(Order.objects.count(), 1)

    def test_checkout_uses_price_at_checkout_time(self):
        self._auth()
        self._add(self.x, 1)
        Product.objects.filter(pk=self.x.pk).update(price=Decimal("11.00"))
        res = self._checkout()
        self.assertEqual(res.data["total_amount"], "11.00")

    def test_price_change_after_checkout_does_not_touch_order(self):
        order_id = self._place_order()
        Product.objects.filter(pk=self.y.pk).update(price=Decimal("99.00"))
        res = self.client.get(f"/api/orders/{order_id}/")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["total_amount"], "20.00")
        self.assertEqual(res.data["lines"][0]["price_per_unit"], "20.00")

    def test_total_beyond_storable_amount_is_rejected(self):
        pricey = Product.objects.create(name="Yacht", price=Decimal("99999999.99"))
        cart = Cart.objects.create(user=self.user)
        CartItem.objects.create(cart=cart, product=pricey, quantity=200)
        self._auth()
        res = self._checkout()
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "VALIDATION_ERROR")
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(CartItem.objects.filter(cart=cart).count(), 1)

    def test_requires_authentication(self):
        res = self._checkout()
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)


class TestCheckoutRollback(OrderApiTestCase):
    def test_failure_after_order_insert_rolls_back_everything(self):
        cart = Cart.objects.create(user=self.user)
        CartItem.objects.create(cart=cart, product=self.y, quantity=2)
        service = build_checkout_service()
        with patch.object(
            service.order_details, "create_lines", side_effect=DatabaseError("boom")
        ):
            with self.assertRaises(StorageFailureError):
                service.checkout(self.user.id, "1 Main St")
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(OrderDetail.objects.count(), 0)
        self.assertEqual(CartItem.objects.filter(cart=cart).count(), 1)

    def test_empty_cart_leaves_orders_unchanged(self):
        Cart.objects.create(user=self.user)
        with self.assertRaises(EmptyCartError):
            build_checkout_service().checkout(self.user.id, "1 Main St")
        self.assertEqual(Order.objects.count(), 0)


class TestOrderLedger(OrderApiTestCase):
    def test_list_own_orders_newest_first(self):
        first = self._place_order()
        second = self._place_order()
        self._place_order(self.other)
        self._auth()
        res = self.client.get("/api/orders/")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["count"], 2)
        self.assertEqual(
            [o["order_id"] for o in res.data["results"]], [second, first]
        )

    def test_list_all_requires_privilege(self):
        self._place_order()
        self._place_order(self.other)
        self._auth()
        self.assertEqual(
            self.client.get("/api/orders/all/").status_code, status.HTTP_403_FORBIDDEN
        )
        self._auth(self.admin)
        res = self.client.get("/api/orders/all/")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["count"], 2)

    def test_other_users_order_is_hidden(self):
        order_id = self._place_order()
        self._auth(self.other)
        res = self.client.get(f"/api/orders/{order_id}/")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self._auth(self.admin)
        res = self.client.get(f"/api/orders/{order_id}/")
        self.assertEqual(res.status_code, status.HTTP_200_OK)

    def test_status_moves_forward_only(self):
        order_id = self._place_order()
        url = f"/api/orders/{order_id}/status/"

        self._auth()
        res = self.client.patch(url, {"status": "confirmed"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

        self._auth(self.admin)
        res = self.client.patch(url, {"status": "confirmed"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["status"], "confirmed")

        res = self.client.patch(url, {"status": "confirmed"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)

        res = self.client.patch(url, {"status": "pending"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(res.data["error"]["code"], "INVALID_TRANSITION")

        res = self.client.patch(url, {"status": "lost"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "VALIDATION_ERROR")

        res = self.client.patch(url, {"status": "shipped"}, format="json")
        self.assertEqual(res.data["status"], "shipped")
        self.assertEqual(Order.objects.get(order_id=order_id).status, "shipped")
        self.assertEqual(res.data["total_amount"], "20.00")

    def test_status_update_unknown_order(self):
        self._auth(self.admin)
        res = self.client.patch(
            "/api/orders/00000000-0000-0000-0000-000000000000/status/",
            {"status": "confirmed"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
