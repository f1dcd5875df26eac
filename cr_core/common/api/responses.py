from __future__ import annotations

from typing import Any

from rest_framework import status
from rest_framework.response import Response


def build_envelope(*, message: str, status_code: int, data: Any = None) -> dict[str, Any]:
    """
    Canonical response body. statusCode always mirrors the HTTP status.
    Shared by success responses and the global exception handler.
    """
    return {
        "success": status_code < 400,
        "message": message,
        "responseObject": data,
        "statusCode": status_code,
    }


def envelope(message: str, data: Any = None, *, status_code: int = status.HTTP_200_OK, headers=None) -> Response:
    return Response(
        build_envelope(message=message, status_code=status_code, data=data),
        status=status_code,
        headers=headers,
    )


def created(message: str, data: Any = None) -> Response:
    return envelope(message, data, status_code=status.HTTP_201_CREATED)
