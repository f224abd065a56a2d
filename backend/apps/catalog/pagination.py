from rest_framework.pagination import PageNumberPagination


class ProductListPagination(PageNumberPagination):
    # Storefront grid default; ?limit= overrides up to max_page_size.
    page_size = 24
    page_size_query_param = 'limit'
    max_page_size = 100
