"""
Request-level authentication and capability checks.

Every cart and order endpoint needs a resolved user id before the service
layer is invoked, and a few ledger endpoints additionally need an
administrative account. Both decisions are made here, once, and attached to
the request as plain values (``validated_user_id``, ``is_privileged_user``)
so services never inspect token claims themselves.
"""
from typing import Any, Optional

from django.http import HttpRequest
from rest_framework.exceptions import AuthenticationFailed as DRFAuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

from apps.api.utils import error_response
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="validation")

_jwt_authenticator = JWTAuthentication()

AUTHENTICATED = "authenticated"
PRIVILEGED = "privileged"

# View class name -> access level. Views not listed here are public.
VIEW_ACCESS = {
    "CartView": AUTHENTICATED,
    "CartItemListView": AUTHENTICATED,
    "OrderListView": AUTHENTICATED,
    "OrderDetailView": AUTHENTICATED,
    "OrderListAllView": PRIVILEGED,
    "OrderStatusView": PRIVILEGED,
}


def _is_privileged_user(user: Any) -> bool:
    return bool(getattr(user, "is_staff", False) or getattr(user, "is_superuser", False))


def _is_authenticated_user(request: HttpRequest) -> bool:
    user = getattr(request, "user", None)
    if user and getattr(user, "is_authenticated", False) and getattr(user, "id", None):
        return True

    # DRF authenticates later in the request lifecycle, so bearer tokens are
    # verified here directly.
    meta = getattr(request, "META", {}) or {}
    auth_header = meta.get("HTTP_AUTHORIZATION") if hasattr(meta, "get") else None
    if not auth_header:
        return False

    try:
        authenticated = _jwt_authenticator.authenticate(request)
    except (InvalidToken, DRFAuthenticationFailed) as exc:
        logger.warning("JWT authentication failed", detail=str(exc))
        return False

    if not authenticated:
        return False

    user, token = authenticated
    if not getattr(user, "is_authenticated", False) or not getattr(user, "id", None):
        return False

    request.user = user
    request.auth = token
    logger.debug("Authenticated user from bearer token", user_id=user.id)
    return True


def _set_validated_user(request: HttpRequest, user_id: Optional[int]) -> None:
    request.validated_user_id = user_id
    request.is_privileged_user = _is_privileged_user(getattr(request, "user", None))


def validate_request_context(request: HttpRequest, view_class, view_kwargs) -> Any:
    """
    Returns a DRF Response when the request must be rejected before reaching
    the view; otherwise None, with the resolved identity attached to the request.
    """
    view_name = getattr(view_class, "__name__", "")
    access = VIEW_ACCESS.get(view_name)
    if access is None:
        return None

    method = getattr(request, "method", None)
    logger.debug("Running request context validation", view=view_name, method=method)

    if not _is_authenticated_user(request):
        logger.warning("Request rejected: authentication required", view=view_name, method=method)
        return error_response("UNAUTHORIZED", "Authentication required")

    actor_id = int(request.user.id)
    _set_validated_user(request, actor_id)

    if access == PRIVILEGED and not request.is_privileged_user:
        logger.warning(
            "Request rejected: administrative role required",
            view=view_name,
            method=method,
            actor_id=actor_id,
        )
        return error_response(
            "FORBIDDEN", "You do not have permission to perform this action"
        )

    logger.debug(
        "Validated request context",
        view=view_name,
        actor_id=actor_id,
        privileged=request.is_privileged_user,
    )
    return None
