"""Transport error translators.

The product service raises the transport-independent taxonomy from
``modules.products.exceptions``.  Each transport plugs one translator
into the service:

- ``DomainErrorTranslator``: in-process callers, keeps the taxonomy.
- ``HttpErrorTranslator``: DRF ``APIException`` subclasses.
- ``RpcErrorTranslator``: ``RpcException`` carrying ``{message, status}``.

Severity mapping is shared: not found / invalid id / invalid page are
client errors, anything else is a server error whose cause is logged
and replaced by a generic message.  Translators return errors that are
already in their own transport shape unchanged.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Protocol, Tuple, Type

import structlog
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound

from modules.products.exceptions import (
    InvalidPage,
    InvalidProductId,
    ProductError,
    ProductInternalError,
    ProductNotFound,
)

logger = structlog.get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal error while processing the product."


class ErrorTranslator(Protocol):
    def translate(self, error: Exception) -> Exception: ...


class BaseErrorTranslator(ABC):
    """Shared classification; subclasses only build the transport shape."""

    translated_types: Tuple[Type[Exception], ...] = ()

    def translate(self, error: Exception) -> Exception:
        if self.translated_types and isinstance(error, self.translated_types):
            return error
        if not isinstance(error, ProductError):
            logger.error(
                "product.unexpected_error",
                cause_type=type(error).__name__,
                cause=str(error),
            )
            error = ProductInternalError(error)
        if isinstance(error, ProductInternalError):
            return self.internal_error(error)
        if isinstance(error, ProductNotFound):
            return self.not_found(error)
        return self.bad_request(error)

    @abstractmethod
    def not_found(self, error: ProductNotFound) -> Exception: ...

    @abstractmethod
    def bad_request(self, error: ProductError) -> Exception: ...

    @abstractmethod
    def internal_error(self, error: ProductInternalError) -> Exception: ...


class DomainErrorTranslator(BaseErrorTranslator):
    """Keeps the domain taxonomy for callers that are not a transport."""

    translated_types = (ProductError,)

    def not_found(self, error: ProductNotFound) -> Exception:
        return error

    def bad_request(self, error: ProductError) -> Exception:
        return error

    def internal_error(self, error: ProductInternalError) -> Exception:
        return error


# ---------------------------------------------------------------------------
# HTTP (Django REST Framework)
# ---------------------------------------------------------------------------


class ProductBadRequest(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request."
    default_code = "bad_request"


def _error_code(error: ProductError) -> str:
    if isinstance(error, InvalidPage):
        return "invalid_page"
    if isinstance(error, InvalidProductId):
        return "invalid_id"
    return "bad_request"


class HttpErrorTranslator(BaseErrorTranslator):
    translated_types = (APIException,)

    def not_found(self, error: ProductNotFound) -> Exception:
        return NotFound(detail=str(error))

    def bad_request(self, error: ProductError) -> Exception:
        return ProductBadRequest(detail=str(error), code=_error_code(error))

    def internal_error(self, error: ProductInternalError) -> Exception:
        return APIException(detail=INTERNAL_ERROR_MESSAGE, code="internal_error")


# ---------------------------------------------------------------------------
# RPC (message based)
# ---------------------------------------------------------------------------


class RpcException(Exception):
    """Error envelope returned to RPC callers."""

    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    @property
    def error(self) -> Dict[str, Any]:
        return {"message": self.message, "status": self.status}


class RpcErrorTranslator(BaseErrorTranslator):
    translated_types = (RpcException,)

    def not_found(self, error: ProductNotFound) -> Exception:
        return RpcException(str(error), status.HTTP_404_NOT_FOUND)

    def bad_request(self, error: ProductError) -> Exception:
        return RpcException(str(error), status.HTTP_400_BAD_REQUEST)

    def internal_error(self, error: ProductInternalError) -> Exception:
        return RpcException(
            INTERNAL_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR
        )
