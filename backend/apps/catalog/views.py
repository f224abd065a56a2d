from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.schemas import paginated_response, ErrorResponseSerializer
from apps.common import get_logger
from .container import build_catalog_service
from .pagination import ProductListPagination
from .serializers import ProductReadSerializer

logger = get_logger(__name__).bind(component="catalog", layer="view")


@extend_schema(tags=["Catalog"])
class ProductListView(APIView):
    permission_classes = [AllowAny]
    service = build_catalog_service()
    pagination_class = ProductListPagination
    log = logger.bind(view="ProductListView")

    @extend_schema(
        operation_id="products_list",
        summary="List products",
        description="Supports pagination via ?page and ?limit. Cached results may be served.",
        parameters=[
            OpenApiParameter(
                name="category",
                description="Filter by category name",
                required=False,
                type=str,
            )
        ],
        responses={200: paginated_response(ProductReadSerializer)},
    )
    def get(self, request):
        category = request.query_params.get("category")
        self.log.debug("Handling product list request", category=category)
        products = self.service.list_products(category)
        paginator = self.pagination_class()
        page = paginator.paginate_queryset(products, request, view=self)
        if page is None:
            return Response(ProductReadSerializer(products, many=True).data)
        return paginator.get_paginated_response(
            ProductReadSerializer(page, many=True).data
        )


@extend_schema(tags=["Catalog"])
class ProductDetailView(APIView):
    permission_classes = [AllowAny]
    service = build_catalog_service()
    log = logger.bind(view="ProductDetailView")

    @extend_schema(
        summary="Get product",
        responses={
            200: ProductReadSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, product_id):
        self.log.debug("Fetching product detail", product_id=product_id)
        # ProductNotFoundError is rendered by the global exception handler.
        dto = self.service.get_product(product_id)
        return Response(ProductReadSerializer(dto).data)
