import logging
import time

from django.conf import settings
from django.http import JsonResponse

access_logger = logging.getLogger('clinic.access')

API_PREFIX = '/api/'


def _is_api(request) -> bool:
    return (request.path or '').startswith(API_PREFIX)


class PayloadLimitMiddleware:
    """Reject oversized API bodies with 413 before anything parses them."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if _is_api(request):
            try:
                length = int(request.META.get('CONTENT_LENGTH') or 0)
            except ValueError:
                length = 0
            if length > settings.API_MAX_BODY_BYTES:
                return JsonResponse({'error': 'Payload too large'}, status=413)
        return self.get_response(request)


class NoStoreApiMiddleware:
    """Mark every API response as non-cacheable."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)
        if _is_api(request):
            response['Cache-Control'] = 'no-store'
        return response


class AccessLogMiddleware:
    """One log line per API request: method, path, status and duration."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if not _is_api(request):
            return self.get_response(request)
        started = time.monotonic()
        response = self.get_response(request)
        elapsed_ms = (time.monotonic() - started) * 1000
        access_logger.info('%s %s %s %.1fms', request.method, request.get_full_path(), response.status_code, elapsed_ms)
        return response
