from django.urls import path
from .views import OrderListView, OrderListAllView, OrderDetailView, OrderStatusView

urlpatterns = [
    path("", OrderListView.as_view(), name="api-orders"),
    path("all/", OrderListAllView.as_view(), name="api-orders-all"),
    path("<uuid:order_id>/", OrderDetailView.as_view(), name="api-order-detail"),
    path("<uuid:order_id>/status/", OrderStatusView.as_view(), name="api-order-status"),
]
