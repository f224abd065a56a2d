from rest_framework import status
from rest_framework.exceptions import NotAuthenticated, ValidationError
from rest_framework.test import APIRequestFactory

from apps.api.exceptions import global_exception_handler
from apps.common.errors import EmptyCartError, StorageFailureError

factory = APIRequestFactory()


class DummyView:
    pass


def _context(request):
    return {"request": request, "view": DummyView()}


def test_core_error_returns_structured_response():
    request = factory.post("/api/orders/")
    exc = EmptyCartError(details={"cartId": "abc123"})
    response = global_exception_handler(exc, _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert payload["code"] == "EMPTY_CART"
    assert payload["message"] == "Cart is empty"
    assert payload["details"] == {"cartId": "abc123"}


def test_storage_failure_is_generic_500():
    request = factory.post("/api/orders/")
    exc = StorageFailureError(details={"operation": "checkout"})
    response = global_exception_handler(exc, _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert payload["code"] == "SERVER_ERROR"
    assert payload["message"] == "Something went wrong"
    assert "details" not in payload


def test_validation_error_preserves_details():
    request = factory.post("/api/cart/items/", data={})
    exc = ValidationError({"field": ["This field is required."]})
    response = global_exception_handler(exc, _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert payload["code"] == "VALIDATION_ERROR"
    assert payload["message"] == "Validation failed"
    assert payload["details"] == {"field": ["This field is required."]}


def test_not_authenticated_maps_to_unauthorized():
    request = factory.get("/api/cart/")
    response = global_exception_handler(NotAuthenticated(), _context(request))
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.data["error"]["code"] == "UNAUTHORIZED"


def test_unhandled_exception_returns_generic_message():
    request = factory.get("/api/orders/")
    response = global_exception_handler(RuntimeError("boom"), _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert payload["code"] == "SERVER_ERROR"
    assert payload["message"] == "Something went wrong"
    assert "details" not in payload
