import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import (
    AuthenticationFailed,
    NotAuthenticated,
    PermissionDenied,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _envelope(code: str, message: str, **extra):
    error = {"code": code, "message": message}
    error.update(extra)
    return {"success": False, "data": None, "error": error}


def custom_exception_handler(exc, context):
    if isinstance(exc, DatabaseError):
        # store unreachable / statement failed: not a domain error
        logger.exception("database failure in %s", context.get("view").__class__.__name__)
        return Response(
            _envelope("SERVICE_UNAVAILABLE", "Service temporarily unavailable"),
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    response = exception_handler(exc, context)
    if response is None:
        return response

    if isinstance(exc, NotAuthenticated):
        response.data = _envelope("UNAUTHORIZED", "Authentication required")
    elif isinstance(exc, AuthenticationFailed):
        response.data = _envelope("INVALID_SESSION", "Invalid or expired session")
    elif isinstance(exc, PermissionDenied):
        response.data = _envelope("FORBIDDEN", "Permission denied")
    elif isinstance(exc, ValidationError):
        response.data = _envelope("VALIDATION_ERROR", "Invalid request", fields=exc.detail)

    return response
