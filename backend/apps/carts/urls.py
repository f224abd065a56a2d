from django.urls import path
from .views import CartView, CartItemListView

urlpatterns = [
    path("", CartView.as_view(), name="api-cart"),
    path("items/", CartItemListView.as_view(), name="api-cart-items"),
]
