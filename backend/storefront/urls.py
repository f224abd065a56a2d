from django.urls import path, include
from django.conf import settings
from apps.common.views import live_health, ready_health
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularSwaggerView,
    SpectacularRedocView,
)

urlpatterns = [
    path("api/", include("apps.api.urls")),
    path("health/live", live_health, name="health-live"),
    path("health/ready", ready_health, name="health-ready"),
]

# The interactive schema is only exposed while DEBUG is on.
if settings.DEBUG:
    urlpatterns += [
        path("schema/", SpectacularAPIView.as_view(), name="schema"),
        path(
            "docs/swagger/",
            SpectacularSwaggerView.as_view(url_name="schema"),
            name="swagger-ui",
        ),
        path(
            "docs/redoc/",
            SpectacularRedocView.as_view(url_name="schema"),
            name="redoc",
        ),
    ]
