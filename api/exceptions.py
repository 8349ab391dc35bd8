"""
API exception handlers.

This module provides custom exception handling for REST API responses.
Every error leaves the API as {"error": {"code": ..., "message": ...}}.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core import metrics
from core.domain.exceptions import DomainException, ErrorKind, InvalidBrandError

logger = logging.getLogger(__name__)

KIND_STATUS = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.BUSINESS_RULE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
}


def error_body(code: str, message: str, details: Any = None) -> Dict[str, Any]:
    """Build the error envelope."""
    body = {"error": {"code": code, "message": message}}
    if details is not None:
        body["error"]["details"] = details
    return body


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    correlation_id = _get_correlation_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, correlation_id)
    elif isinstance(exc, ValidationError):
        response = Response(
            error_body("VALIDATION_ERROR", "Request validation failed", exc.detail),
            status=status.HTTP_400_BAD_REQUEST,
        )
    elif isinstance(exc, ValueError):
        # Entity invariant violated by request input
        logger.warning("Invalid input: %s", exc, extra={"correlation_id": correlation_id})
        response = Response(
            error_body("VALIDATION_ERROR", str(exc)), status=status.HTTP_400_BAD_REQUEST
        )
    elif isinstance(exc, Http404):
        response = Response(
            error_body("NOT_FOUND", "Resource not found"), status=status.HTTP_404_NOT_FOUND
        )
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        response.data = error_body(code, str(exc.detail))
    else:
        response = _handle_unexpected_exception(exc, context, correlation_id)

    if correlation_id:
        response["X-Correlation-ID"] = correlation_id
    return response


def _get_correlation_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract correlation ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "correlation_id", None)


def status_for(exc: DomainException) -> int:
    """HTTP status for a domain exception."""
    if isinstance(exc, InvalidBrandError) and exc.tenant_mismatch:
        return status.HTTP_403_FORBIDDEN
    return KIND_STATUS.get(exc.kind, status.HTTP_400_BAD_REQUEST)


def _handle_domain_exception(exc: DomainException, correlation_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    logger.warning(
        "Domain exception: %s - %s", exc.code, exc.message, extra={"correlation_id": correlation_id}
    )
    return Response(error_body(exc.code, exc.message), status=status_for(exc))


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], correlation_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error(
        "Unexpected error: %s", exc, extra={"correlation_id": correlation_id}, exc_info=True
    )
    request = context.get("request")
    metrics.errors_total.labels(
        error_type=type(exc).__name__,
        endpoint=getattr(request, "path", "unknown"),
    ).inc()
    return Response(
        error_body("INTERNAL_ERROR", "An internal error occurred"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
