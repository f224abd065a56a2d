from __future__ import annotations

from django.conf import settings
from django.core.cache import cache

from .repositories import ProductRepository
from .services import CatalogLookupService


def build_catalog_service(*, disable_cache: bool = False) -> CatalogLookupService:
    return CatalogLookupService(
        products=ProductRepository(),
        cache_backend=cache,
        disable_cache=disable_cache,
        cache_timeout=getattr(settings, "CACHE_TTL", None),
    )
