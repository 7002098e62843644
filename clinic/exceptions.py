import logging

from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework import exceptions
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response

logger = logging.getLogger(__name__)

ERROR_CODES = (
    (exceptions.ValidationError, 'validation_error'),
    (exceptions.NotAuthenticated, 'not_authenticated'),
    (exceptions.AuthenticationFailed, 'not_authenticated'),
    (exceptions.PermissionDenied, 'permission_denied'),
    (PermissionDenied, 'permission_denied'),
    (exceptions.NotFound, 'not_found'),
    (Http404, 'not_found'),
    (exceptions.MethodNotAllowed, 'method_not_allowed'),
)


def error_code(exc) -> str:
    for exc_class, code in ERROR_CODES:
        if isinstance(exc, exc_class):
            return code
    return 'api_error'


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('unhandled API error', exc_info=exc)
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    # normalize response
    detail = None
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = str(resp.data)
    return Response({'ok': False, 'error': {'code': error_code(exc), 'message': detail}}, status=resp.status_code)
