from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiResponse

from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from .container import build_cart_service
from .serializers import CartContentsSerializer, CartItemWriteSerializer

logger = get_logger(__name__).bind(component="carts", layer="view")


@extend_schema(tags=["Cart"])
class CartView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartView")

    @extend_schema(
        summary="Get my cart",
        description=(
            "Returns the authenticated user's cart, creating it on first access. "
            "Prices are current catalog prices and may differ at checkout."
        ),
        responses={
            200: CartContentsSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        user_id = request.validated_user_id
        self.log.debug("Fetching cart", user_id=user_id)
        contents = self.service.get_cart_for_user(user_id)
        return Response(CartContentsSerializer(contents).data)


@extend_schema(tags=["Cart"])
class CartItemListView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartItemListView")

    @extend_schema(
        summary="Add item to my cart",
        description=(
            "Adds a product to the authenticated user's cart. Adding a product "
            "that is already in the cart increases its quantity."
        ),
        request=CartItemWriteSerializer,
        responses={
            201: CartContentsSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = CartItemWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user_id = request.validated_user_id
        self.log.info(
            "Adding cart item via API",
            user_id=user_id,
            product_id=serializer.validated_data["product_id"],
            quantity=serializer.validated_data["quantity"],
        )
        contents = self.service.add_item_for_user(user_id, dict(serializer.validated_data))
        return Response(
            CartContentsSerializer(contents).data, status=status.HTTP_201_CREATED
        )
