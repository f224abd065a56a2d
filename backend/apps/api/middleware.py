from django.utils.deprecation import MiddlewareMixin
from rest_framework.renderers import JSONRenderer

from apps.api.validation import validate_request_context
from apps.common import get_logger

logger = get_logger(__name__).bind(component='api', layer='middleware')


class RequestValidationMiddleware(MiddlewareMixin):
    """
    Resolves the caller's identity and capability for cart and order views
    before DRF dispatches to them; rejects the request early when either is
    missing.
    """

    def process_view(self, request, view_func, view_args, view_kwargs):
        view_class = getattr(view_func, 'view_class', None)
        if not view_class:
            return None
        response = validate_request_context(request, view_class, view_kwargs)
        if response is not None:
            # The Response never went through a DRF view, so it has no renderer yet.
            response.accepted_renderer = JSONRenderer()
            response.accepted_media_type = 'application/json'
            response.renderer_context = {}
            response.render()
            logger.info(
                'Request blocked by validation',
                view=view_class.__name__,
                method=getattr(request, 'method', None),
                status=response.status_code,
            )
        return response
