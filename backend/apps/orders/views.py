from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiResponse

from apps.api.schemas import paginated_response, ErrorResponseSerializer
from apps.common import get_logger
from .container import build_checkout_service, build_order_ledger_service
from .pagination import OrderListPagination
from .serializers import CheckoutSerializer, OrderSerializer, OrderStatusUpdateSerializer

logger = get_logger(__name__).bind(component="orders", layer="view")


def _paginated(view, request, orders):
    paginator = view.pagination_class()
    page = paginator.paginate_queryset(orders, request, view=view)
    if page is None:
        return Response(OrderSerializer(orders, many=True).data)
    return paginator.get_paginated_response(OrderSerializer(page, many=True).data)


@extend_schema(tags=["Orders"])
class OrderListView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_order_ledger_service()
    checkout_service = build_checkout_service()
    pagination_class = OrderListPagination
    log = logger.bind(view="OrderListView")

    @extend_schema(
        operation_id="orders_list_mine",
        summary="List my orders",
        description="Newest first. Supports pagination via ?page and ?limit.",
        responses={
            200: paginated_response(OrderSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        user_id = request.validated_user_id
        self.log.debug("Listing own orders", user_id=user_id)
        orders = self.service.list_orders_for_user(user_id)
        return _paginated(self, request, orders)

    @extend_schema(
        summary="Check out my cart",
        description=(
            "Creates an order from the current cart contents at current catalog "
            "prices and empties the cart, all in one transaction."
        ),
        request=CheckoutSerializer,
        responses={
            201: OrderSerializer,
            400: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="EMPTY_CART or VALIDATION_ERROR",
            ),
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(
                response=ErrorResponseSerializer, description="User has no cart"
            ),
        },
    )
    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user_id = request.validated_user_id
        self.log.info("Checkout requested", user_id=user_id)
        order = self.checkout_service.checkout(
            user_id, serializer.validated_data["shipping_address"]
        )
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Orders"])
class OrderListAllView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_order_ledger_service()
    pagination_class = OrderListPagination
    log = logger.bind(view="OrderListAllView")

    @extend_schema(
        operation_id="orders_list_all",
        summary="List all orders",
        description="Administrators only. Newest first.",
        responses={
            200: paginated_response(OrderSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
            403: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        self.log.debug("Listing all orders", actor_id=request.validated_user_id)
        return _paginated(self, request, self.service.list_all_orders())


@extend_schema(tags=["Orders"])
class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_order_ledger_service()
    log = logger.bind(view="OrderDetailView")

    @extend_schema(
        summary="Get order",
        description="Owners see their own orders; administrators see any order.",
        responses={
            200: OrderSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, order_id):
        owner_id = None if request.is_privileged_user else request.validated_user_id
        self.log.debug("Fetching order", order_id=order_id, owner_id=owner_id)
        order = self.service.get_order(order_id, user_id=owner_id)
        return Response(OrderSerializer(order).data)


@extend_schema(tags=["Orders"])
class OrderStatusView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_order_ledger_service()
    log = logger.bind(view="OrderStatusView")

    @extend_schema(
        summary="Update order status",
        description="Administrators only. pending -> confirmed -> shipped; never backwards.",
        request=OrderStatusUpdateSerializer,
        responses={
            200: OrderSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            403: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(
                response=ErrorResponseSerializer, description="INVALID_TRANSITION"
            ),
        },
    )
    def patch(self, request, order_id):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.log.info(
            "Order status change requested",
            order_id=order_id,
            actor_id=request.validated_user_id,
            status=serializer.validated_data["status"],
        )
        order = self.service.update_status(order_id, serializer.validated_data["status"])
        return Response(OrderSerializer(order).data)
