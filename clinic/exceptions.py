"""
Unified API error handling.

Every failure leaving an API view is rendered as ``{"error": "<message>"}``.
Validation problems keep DRF's status code (400 for bad input, 405 for a
wrong method and so on) with the first message as the error text; database
failures become a 500 with a remediation hint; anything unexpected is a
plain 500.
"""
import logging

from django.conf import settings
from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import APIException, ParseError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler, set_rollback

logger = logging.getLogger(__name__)


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'conflict'
    default_code = 'conflict'


def db_error_payload() -> dict:
    return {'error': 'Database error', 'hint': settings.DB_ERROR_HINT}


def error_response(message, status_code: int) -> Response:
    return Response({'error': message}, status=status_code)


def first_message(detail) -> str:
    """Return the first human readable message from a DRF error detail."""
    if isinstance(detail, dict):
        for value in detail.values():
            return first_message(value)
        return 'invalid request'
    if isinstance(detail, (list, tuple)):
        return first_message(detail[0]) if detail else 'invalid request'
    return str(detail)


def api_exception_handler(exc, context):
    if isinstance(exc, ParseError):
        set_rollback()
        return error_response('Invalid JSON', status.HTTP_400_BAD_REQUEST)

    resp = drf_exception_handler(exc, context)
    if resp is not None:
        resp.data = {'error': first_message(resp.data.get('detail', resp.data) if isinstance(resp.data, dict) else resp.data)}
        return resp

    set_rollback()
    view = context.get('view')
    where = view.__class__.__name__ if view is not None else 'api'
    if isinstance(exc, DatabaseError):
        logger.exception('database error in %s', where)
        return Response(db_error_payload(), status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    logger.exception('unhandled error in %s', where)
    return error_response('Server error', status.HTTP_500_INTERNAL_SERVER_ERROR)
