import json
import types

from rest_framework.test import APIRequestFactory

from apps.api.middleware import RequestValidationMiddleware
from apps.api.validation import validate_request_context
from apps.carts.views import CartItemListView, CartView
from apps.catalog.views import ProductListView
from apps.orders.views import OrderDetailView, OrderListAllView, OrderStatusView


factory = APIRequestFactory()


def _user(user_id=42, staff=False, superuser=False):
    return types.SimpleNamespace(
        id=user_id, is_authenticated=True, is_staff=staff, is_superuser=superuser
    )


def test_public_views_are_not_validated():
    request = factory.get("/api/products/")
    assert validate_request_context(request, ProductListView, {}) is None
    assert not hasattr(request, "validated_user_id")


def test_sets_validated_user_for_cart_views():
    request = factory.post("/api/cart/items/", {}, format="json")
    request.user = _user(42)
    response = validate_request_context(request, CartItemListView, {})
    assert response is None
    assert request.validated_user_id == 42
    assert request.is_privileged_user is False


def test_anonymous_request_is_unauthorized():
    request = factory.get("/api/cart/")
    request.user = types.SimpleNamespace(id=None, is_authenticated=False)
    response = validate_request_context(request, CartView, {})
    assert response.status_code == 401
    assert response.data["error"]["code"] == "UNAUTHORIZED"


def test_invalid_bearer_token_is_unauthorized():
    request = factory.get("/api/cart/", HTTP_AUTHORIZATION="Bearer not-a-token")
    response = validate_request_context(request, CartView, {})
    assert response.status_code == 401


def test_privileged_view_rejects_regular_user():
    request = factory.get("/api/orders/all/")
    request.user = _user(7)
    response = validate_request_context(request, OrderListAllView, {})
    assert response.status_code == 403
    assert response.data["error"]["code"] == "FORBIDDEN"


def test_privileged_view_accepts_staff_and_superuser():
    for user in (_user(1, staff=True), _user(2, superuser=True)):
        request = factory.patch("/api/orders/x/status/", {}, format="json")
        request.user = user
        assert validate_request_context(request, OrderStatusView, {}) is None
        assert request.is_privileged_user is True


def test_owner_view_flags_privilege_without_rejecting():
    request = factory.get("/api/orders/x/")
    request.user = _user(3)
    assert validate_request_context(request, OrderDetailView, {}) is None
    assert request.is_privileged_user is False


def test_middleware_no_view_class_returns_none():
    middleware = RequestValidationMiddleware(lambda req: None)
    request = factory.get("/health/live")
    response = middleware.process_view(request, lambda req: req, [], {})
    assert response is None


def test_middleware_renders_rejection():
    middleware = RequestValidationMiddleware(lambda req: None)
    request = factory.get("/api/orders/all/")
    request.user = _user(9)
    response = middleware.process_view(request, OrderListAllView.as_view(), [], {})
    assert response.status_code == 403
    body = json.loads(response.content)
    assert body["error"]["code"] == "FORBIDDEN"
