"""Django ORM implementation of the Product store.

Satisfies ``IProductStore`` using Django's async QuerySet API.
Lookup failures caused by a malformed identifier (e.g. ``"abc"`` for an
integer primary key) are tagged as ``INVALID_IDENTIFIER``; an update
that matches no row is tagged as ``RECORD_NOT_FOUND``.  Everything else
propagates untouched and is classified by the service layer.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional

import structlog
from asgiref.sync import sync_to_async
from django.core.exceptions import ValidationError
from django.db import connections

from modules.core.repositories.interfaces import StoreErrorCode, StoreKnownRequestError
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductStore

logger = structlog.get_logger(__name__)


@contextmanager
def _tag_invalid_identifier(where: Mapping[str, Any]) -> Iterator[None]:
    try:
        yield
    except (ValueError, TypeError, ValidationError) as exc:
        raise StoreKnownRequestError(
            StoreErrorCode.INVALID_IDENTIFIER,
            f"Invalid lookup {dict(where)!r}: {exc}",
        ) from exc


class ProductDjangoStore(IProductStore):
    """Concrete Product store backed by Django ORM."""

    def __init__(self, using: str = "default") -> None:
        self._using = using
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def connect(self) -> None:
        if self._connected:
            return
        await sync_to_async(connections[self._using].ensure_connection)()
        self._connected = True
        logger.info("product_store.connected", database=self._using)

    async def disconnect(self) -> None:
        if not self._connected:
            return
        await sync_to_async(connections[self._using].close)()
        self._connected = False
        logger.info("product_store.disconnected", database=self._using)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _filter(self, where: Mapping[str, Any]):
        return Product.objects.using(self._using).filter(**where)

    async def find_unique(self, where: Mapping[str, Any]) -> Optional[Product]:
        with _tag_invalid_identifier(where):
            return await self._filter(where).afirst()

    async def find_many(
        self, *, skip: int, take: int, where: Mapping[str, Any]
    ) -> List[Product]:
        with _tag_invalid_identifier(where):
            queryset = self._filter(where)[skip : skip + take]
            return [product async for product in queryset]

    async def count(self, where: Mapping[str, Any]) -> int:
        with _tag_invalid_identifier(where):
            return await self._filter(where).acount()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def create(self, data: Mapping[str, Any]) -> Product:
        product = await Product.objects.using(self._using).acreate(**data)
        logger.info("product_store.created", product_id=product.id)
        return product

    async def update(
        self, *, where: Mapping[str, Any], data: Mapping[str, Any]
    ) -> Product:
        with _tag_invalid_identifier(where):
            product = await self._filter(where).afirst()
        if product is None:
            raise StoreKnownRequestError(
                StoreErrorCode.RECORD_NOT_FOUND,
                f"No product matches {dict(where)!r}.",
            )

        for field, value in data.items():
            setattr(product, field, value)
        if data:
            await product.asave(using=self._using, update_fields=list(data))
        logger.info(
            "product_store.updated",
            product_id=product.id,
            fields=sorted(data),
        )
        return product
