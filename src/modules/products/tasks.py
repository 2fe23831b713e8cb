"""Product RPC message handlers.

Each Celery task is one message pattern of the RPC transport.  Tasks
take a plain JSON payload and reply with ``{"data": ...}`` on success
or ``{"error": {"message": ..., "status": ...}}`` when the service
raises an ``RpcException``.  An optional ``correlation_id`` in the
payload is bound to every log line of the call.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Type, TypeVar

import structlog
from asgiref.sync import async_to_sync
from celery import shared_task
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status

from modules.products.dtos import (
    CreateProductDTO,
    PaginationDTO,
    ProductOutputDTO,
    UpdateProductDTO,
)
from modules.products.exceptions import InvalidProductId
from modules.products.models import Product
from modules.products.services import ProductService, get_product_service
from modules.products.translators import RpcErrorTranslator, RpcException

logger = structlog.get_logger(__name__)

D = TypeVar("D", bound=BaseModel)
Handler = Callable[[ProductService, Dict[str, Any]], Awaitable[Any]]


def _serialize(product: Product) -> Dict[str, Any]:
    return ProductOutputDTO.from_entity(product).model_dump(mode="json")


def _validate(dto_class: Type[D], payload: Dict[str, Any]) -> D:
    try:
        return dto_class.model_validate(payload)
    except PydanticValidationError as exc:
        message = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise RpcException(message, status.HTTP_400_BAD_REQUEST) from exc


def _product_id(payload: Dict[str, Any]) -> Any:
    """Return the payload id as an ``int`` or a string for the store to parse.

    Floats and other JSON types are rejected here: the store would
    truncate ``1.7`` to ``1`` and act on another product.
    """
    product_id = payload.get("id")
    if product_id is None:
        raise RpcException("Field 'id' is required.", status.HTTP_400_BAD_REQUEST)
    if isinstance(product_id, bool) or not isinstance(product_id, (int, str)):
        raise RpcException(
            str(InvalidProductId(product_id)), status.HTTP_400_BAD_REQUEST
        )
    return product_id


def _reply(
    pattern: str, payload: Dict[str, Any] | None, handler: Handler
) -> Dict[str, Any]:
    payload = dict(payload or {})
    correlation_id = payload.pop("correlation_id", None)
    with structlog.contextvars.bound_contextvars(
        pattern=pattern, correlation_id=correlation_id
    ):
        service = get_product_service(RpcErrorTranslator())
        try:
            data = async_to_sync(handler)(service, payload)
        except RpcException as exc:
            logger.info("rpc.error_reply", status=exc.status)
            return {"error": exc.error}
        logger.info("rpc.reply")
        return {"data": data}


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def _create(service: ProductService, payload: Dict[str, Any]) -> Any:
    dto = _validate(CreateProductDTO, payload)
    return _serialize(await service.create(dto.model_dump()))


async def _find_all(service: ProductService, payload: Dict[str, Any]) -> Any:
    pagination = _validate(PaginationDTO, payload)
    result = await service.find_all(pagination)
    return result.to_dict(_serialize)


async def _find_one(service: ProductService, payload: Dict[str, Any]) -> Any:
    return _serialize(await service.find_one(_product_id(payload)))


async def _update(service: ProductService, payload: Dict[str, Any]) -> Any:
    product_id = _product_id(payload)
    dto = _validate(UpdateProductDTO, payload)
    return _serialize(
        await service.update(product_id, dto.model_dump(exclude_unset=True))
    )


async def _remove(service: ProductService, payload: Dict[str, Any]) -> Any:
    return _serialize(await service.remove(_product_id(payload)))


# ---------------------------------------------------------------------------
# Message patterns
# ---------------------------------------------------------------------------


@shared_task(name="products.create")
def create_product(payload: Dict[str, Any]) -> Dict[str, Any]:
    return _reply("products.create", payload, _create)


@shared_task(name="products.find_all")
def find_all_products(payload: Dict[str, Any] | None = None) -> Dict[str, Any]:
    return _reply("products.find_all", payload, _find_all)


@shared_task(name="products.find_one")
def find_one_product(payload: Dict[str, Any]) -> Dict[str, Any]:
    return _reply("products.find_one", payload, _find_one)


@shared_task(name="products.update")
def update_product(payload: Dict[str, Any]) -> Dict[str, Any]:
    return _reply("products.update", payload, _update)


@shared_task(name="products.remove")
def remove_product(payload: Dict[str, Any]) -> Dict[str, Any]:
    return _reply("products.remove", payload, _remove)
