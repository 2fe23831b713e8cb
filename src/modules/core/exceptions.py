"""Project-wide DRF exception handler.

Renders every API error in one envelope::

    {"type": "client_error", "errors": [{"code": ..., "detail": ..., "attr": ...}]}

``type`` is ``server_error`` for 5xx responses.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Optional

from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler


def _flatten(detail: Any, attr: Optional[str] = None) -> Iterator[Dict[str, Any]]:
    if isinstance(detail, dict):
        for key, value in detail.items():
            yield from _flatten(value, key if attr is None else f"{attr}.{key}")
    elif isinstance(detail, list):
        for item in detail:
            yield from _flatten(item, attr)
    else:
        yield {
            "code": getattr(detail, "code", "error"),
            "detail": str(detail),
            "attr": attr,
        }


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, APIException):
        detail = exc.detail
    else:
        detail = response.data.get("detail", response.data)

    response.data = {
        "type": "server_error" if response.status_code >= 500 else "client_error",
        "errors": list(_flatten(detail)),
    }
    return response
