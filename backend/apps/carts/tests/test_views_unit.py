import unittest
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import Mock, patch

from rest_framework.test import APIRequestFactory, force_authenticate

from apps.carts.dtos import CartContentsDTO, CartDTO, CartItemDTO, CartLineDTO
from apps.carts.views import CartItemListView, CartView
from apps.common.errors import InvalidQuantityError, ProductNotFoundError

NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)


def make_contents(user_id=10, quantity=2):
    cart_id = uuid.uuid4()
    product_id = uuid.uuid4()
    line = CartLineDTO(
        item=CartItemDTO(
            cart_item_id=uuid.uuid4(),
            cart_id=cart_id,
            product_id=product_id,
            quantity=quantity,
            added_at=NOW,
        ),
        product_name="Widget",
        product_price=Decimal("10.00"),
    )
    return CartContentsDTO(
        cart=CartDTO(cart_id=cart_id, user_id=user_id, created_at=NOW, updated_at=NOW),
        lines=[line],
        subtotal=Decimal("10.00") * quantity,
    )


class CartViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.user = Mock(is_authenticated=True, id=10, is_staff=False, is_superuser=False)

    def _request(self, method, path, data=None):
        request = getattr(self.factory, method)(path, data, format="json")
        force_authenticate(request, user=self.user)
        request.validated_user_id = self.user.id
        request.is_privileged_user = False
        return request

    def test_get_cart_returns_contents(self):
        service = Mock()
        service.get_cart_for_user.return_value = make_contents()
        with patch.object(CartView, "service", service):
            response = CartView.as_view()(self._request("get", "/api/cart/"))
        self.assertEqual(response.status_code, 200)
        service.get_cart_for_user.assert_called_once_with(10)
        self.assertEqual(response.data["subtotal"], "20.00")
        self.assertEqual(response.data["lines"][0]["product_name"], "Widget")
        self.assertEqual(response.data["lines"][0]["product_price"], "10.00")

    def test_add_item_returns_201(self):
        service = Mock()
        service.add_item_for_user.return_value = make_contents(quantity=3)
        product_id = uuid.uuid4()
        with patch.object(CartItemListView, "service", service):
            response = CartItemListView.as_view()(
                self._request(
                    "post",
                    "/api/cart/items/",
                    {"product_id": str(product_id), "quantity": 3},
                )
            )
        self.assertEqual(response.status_code, 201)
        args = service.add_item_for_user.call_args[0]
        self.assertEqual(args[0], 10)
        self.assertEqual(args[1], {"product_id": product_id, "quantity": 3})

    def test_add_item_rejects_zero_quantity_before_service(self):
        service = Mock()
        with patch.object(CartItemListView, "service", service):
            response = CartItemListView.as_view()(
                self._request(
                    "post",
                    "/api/cart/items/",
                    {"product_id": str(uuid.uuid4()), "quantity": 0},
                )
            )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["code"], "VALIDATION_ERROR")
        service.add_item_for_user.assert_not_called()

    def test_add_item_service_errors_are_mapped(self):
        cases = [
            (ProductNotFoundError(), 404, "NOT_FOUND"),
            (InvalidQuantityError(), 400, "VALIDATION_ERROR"),
        ]
        for exc, status_code, code in cases:
            service = Mock()
            service.add_item_for_user.side_effect = exc
            with patch.object(CartItemListView, "service", service):
                response = CartItemListView.as_view()(
                    self._request(
                        "post",
                        "/api/cart/items/",
                        {"product_id": str(uuid.uuid4()), "quantity": 1},
                    )
                )
            self.assertEqual(response.status_code, status_code)
            self.assertEqual(response.data["error"]["code"], code)
