import logging

from django.db import connection, DatabaseError
from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)


def health_check(request):
    """Report whether the database answers."""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
    except DatabaseError:
        logger.exception("Health check failed")
        return JsonResponse({'status': 'unavailable'}, status=503)
    return JsonResponse({'status': 'ok'})


def api_exception_handler(exc, context):
    """
    DRF exception handler.

    Database failures become a generic 503. Everything else is handled by
    DRF as usual.
    """
    if isinstance(exc, DatabaseError):
        view = context.get('view')
        logger.error(
            "Database error in %s",
            view.__class__.__name__ if view is not None else 'unknown view',
            exc_info=exc,
        )
        set_rollback()
        return Response(
            {'error': 'Service temporarily unavailable'},
            status=status.HTTP_503_SERVICE_UNAVAILABLE
        )
    return exception_handler(exc, context)


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'error': 'Not found',
        'status': 404
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'error': 'Internal server error',
        'status': 500
    }, status=500)
