"""Domain error taxonomy and the DRF exception handler.

Every business-rule violation raised by a service derives from
``DomainError`` and falls into one of three families:

- ``NotFound``     -> HTTP 404 (order/product/warehouse/position absent)
- ``Conflict``     -> HTTP 409 (order closed, insufficient stock, ...)
- ``InvalidInput`` -> HTTP 400 (non-positive quantity, malformed body)

Views translate the exceptions they expect; ``api_exception_handler``
covers the rest so that an unclassified failure always becomes a generic
500 without leaking internal details.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)

GENERIC_ERROR_DETAIL = "An unexpected error occurred."


class DomainError(Exception):
    """Base class for all domain errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "domain_error"


class NotFound(DomainError):
    """A requested entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class Conflict(DomainError):
    """The entity is in a state that forbids the requested operation."""

    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class InvalidInput(DomainError):
    """The request carried values the business rules reject."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_input"


def error_response(exc: DomainError) -> Response:
    """Build the HTTP response for a domain error."""
    return Response(
        {"detail": str(exc), "code": exc.code},
        status=exc.status_code,
    )


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """DRF ``EXCEPTION_HANDLER``: one error body for every failure path.

    - DRF ``APIException`` (parse errors, validation, 404/405) keep their
      status code; the body gains a ``code``.
    - ``DomainError`` that escaped a view maps to its own status code.
    - Anything else is logged with its traceback and surfaced as 500.
    """
    response = exception_handler(exc, context)
    if response is not None:
        data = response.data
        if isinstance(data, dict) and "detail" in data:
            detail = data["detail"]
            response.data = {
                "detail": str(detail),
                "code": getattr(detail, "code", "error"),
            }
        else:
            response.data = {
                "detail": "Invalid input.",
                "code": "invalid",
                "errors": data,
            }
        return response

    if isinstance(exc, DomainError):
        return error_response(exc)

    view = context.get("view")
    logger.exception(
        "api.unhandled_error",
        view=type(view).__name__ if view is not None else None,
        error_type=type(exc).__name__,
    )
    return Response(
        {"detail": GENERIC_ERROR_DETAIL, "code": "internal_error"},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
