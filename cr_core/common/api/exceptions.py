# cr_core/common/api/exceptions.py

from __future__ import annotations

import logging
from typing import Any

from django.core.exceptions import ObjectDoesNotExist
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from cr_core.common.api.responses import build_envelope

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MSG = "An unexpected error occurred"
INVALID_INPUT_MSG = "Invalid input"


class ConflictError(APIException):
    """
    409 Conflict that still flows through the global exception handler.
    Use when the current state of a record blocks an action (e.g. completing
    an encounter that never started).
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"

    def __init__(self, detail=None, code=None):
        super().__init__(detail=detail or self.default_detail, code=code or self.default_code)


def _translate_django(exc: Exception) -> Exception:
    """
    Map Django-level exceptions that escaped the service layer onto DRF ones.
    """
    if isinstance(exc, ObjectDoesNotExist):
        return NotFound(str(exc) or "Not found.")
    if isinstance(exc, DjangoValidationError):
        if hasattr(exc, "error_dict"):
            return ValidationError(detail=exc.message_dict)
        return ValidationError(detail=exc.messages)
    return exc


def _first_message(value: Any) -> str | None:
    if isinstance(value, (list, tuple)):
        for v in value:
            found = _first_message(v)
            if found:
                return found
        return None
    if isinstance(value, dict):
        for v in value.values():
            found = _first_message(v)
            if found:
                return found
        return None
    if value is None:
        return None
    return str(value)


def _message_and_details(data: Any) -> tuple[str, Any]:
    # 1) {"detail": "..."} -> message=detail, details=None
    # 2) {"detail": "...", ...} -> message=detail, details={...without detail}
    # 3) ["..."] -> message=first item
    # 4) field errors -> generic message, details=data
    if isinstance(data, dict) and "detail" in data:
        rest = {k: v for k, v in data.items() if k != "detail"}
        return str(data.get("detail")), rest or None

    if isinstance(data, (list, tuple)):
        message = _first_message(data) or INVALID_INPUT_MSG
        return message, (list(data) if len(data) > 1 else None)

    if isinstance(data, dict):
        first = _first_message(data)
        field = next(iter(data.keys()), None)
        if first and field and field != "non_field_errors":
            return f"{INVALID_INPUT_MSG}: {field}: {first}", data
        return first or INVALID_INPUT_MSG, data

    return str(data), None


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    exc = _translate_django(exc)
    response = drf_exception_handler(exc, context)

    # Truly unhandled error: log it, never echo it
    if response is None:
        view = context.get("view")
        logger.error(
            "Unhandled error in %s: %s",
            view.__class__.__name__ if view is not None else "unknown view",
            exc,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return Response(
            build_envelope(message=UNEXPECTED_ERROR_MSG, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    http_status = response.status_code
    message, details = _message_and_details(response.data)

    if http_status >= 500:
        logger.error("Server error %s: %s", http_status, message)

    return Response(
        build_envelope(message=message, status_code=http_status, data=details),
        status=http_status,
        headers=response.headers,
    )
