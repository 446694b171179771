# store/middleware.py
import logging

from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin
from pydantic import ValidationError

from .errors import StoreError

logger = logging.getLogger(__name__)


def validation_message(error):
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    return f"{field}: {first['msg']}" if field else first["msg"]


class ApiErrorMiddleware(MiddlewareMixin):
    """
    Renders errors raised by API views as ``{"message": ...}`` JSON.

    Store errors keep their own status, schema violations become 400 and
    anything else under /api/ is logged and reported as a plain 500.
    """
    def process_exception(self, request, exception):
        if not request.path.startswith('/api/'):
            return None

        if isinstance(exception, StoreError):
            return JsonResponse({'message': exception.message}, status=exception.status_code)

        if isinstance(exception, ValidationError):
            return JsonResponse({'message': validation_message(exception)}, status=400)

        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return JsonResponse({'message': "An unexpected error occurred"}, status=500)
