from django.urls import path, include

urlpatterns = [
    path("products/", include("apps.catalog.urls")),
    path("cart/", include("apps.carts.urls")),
    path("orders/", include("apps.orders.urls")),
]
