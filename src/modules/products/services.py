"""Product service layer (Use Cases).

Orchestrates the resource-access logic for the Product catalog,
delegating persistence to the injected ``IProductStore`` and error
shaping to the injected ``ErrorTranslator``.

Rules enforced here:
- Soft delete: every read, update and removal is scoped to live
  products (``available=True``) through ``find_product_or_throw``.
- ``update`` never writes the identifier nor the ``available`` flag.
- Pagination: ``page`` past the last page is rejected, never truncated.
- Store failures never escape raw: they become one of the taxonomy
  errors in ``modules.products.exceptions``.

Count/fetch in ``find_all`` and assert/mutate in ``update``/``remove``
are separate store round trips, not a transaction.  A product removed
between the assertion and the write surfaces as ``ProductNotFound``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple

import structlog

from modules.core.repositories.interfaces import StoreErrorCode, StoreKnownRequestError
from modules.products.exceptions import (
    InvalidPage,
    InvalidProductId,
    ProductError,
    ProductId,
    ProductInternalError,
    ProductNotFound,
)
from modules.products.pagination import (
    PaginatedResult,
    PaginationMeta,
    calculate_offset,
    calculate_total_pages,
)
from modules.products.repositories import get_product_store
from modules.products.translators import DomainErrorTranslator

if TYPE_CHECKING:
    from modules.products.dtos import PaginationDTO
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductStore
    from modules.products.translators import ErrorTranslator

logger = structlog.get_logger(__name__)

LIVE = {"available": True}

# Fields ``update`` never writes; liveness only changes through ``remove``.
READ_ONLY_FIELDS = frozenset({"id", "available"})


def _internal(operation: str, cause: BaseException) -> ProductInternalError:
    logger.error(
        "product.internal_error",
        operation=operation,
        cause_type=type(cause).__name__,
        cause=str(cause),
    )
    return ProductInternalError(cause)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductStore`` and an ``ErrorTranslator`` via
    constructor injection (DIP).  Without a translator the domain
    taxonomy is raised as is.
    """

    def __init__(
        self,
        store: IProductStore,
        translator: Optional[ErrorTranslator] = None,
    ) -> None:
        self._store = store
        self._translator = translator or DomainErrorTranslator()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    async def find_product_or_throw(self, product_id: ProductId) -> Product:
        """Return the live product with ``product_id``.

        Raises:
            ProductNotFound: no live product has this id.
            InvalidProductId: the store rejected the id as malformed.
            ProductInternalError: any other failure.
        """
        try:
            await self._store.connect()
            product = await self._store.find_unique({"id": product_id, **LIVE})
        except StoreKnownRequestError as exc:
            if exc.code is StoreErrorCode.INVALID_IDENTIFIER:
                logger.warning("product.invalid_id", product_id=str(product_id))
                raise InvalidProductId(product_id) from exc
            raise _internal("find_product_or_throw", exc) from exc
        except Exception as exc:
            raise _internal("find_product_or_throw", exc) from exc

        if product is None:
            raise ProductNotFound(product_id)
        return product

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def create(self, data: Mapping[str, Any]) -> Product:
        """Persist a new live product built from ``data``."""
        try:
            await self._store.connect()
            product = await self._store.create(dict(data))
        except Exception as exc:
            raise self._translator.translate(_internal("create", exc))

        logger.info("product.created", product_id=product.id)
        return product

    async def update(self, product_id: ProductId, patch: Mapping[str, Any]) -> Product:
        """Apply ``patch`` to a live product.

        Raises (through the translator):
            ProductNotFound: not live, or removed before the write.
            InvalidProductId: the store rejected the id as malformed.
        """
        data: Dict[str, Any] = {
            field: value
            for field, value in patch.items()
            if field not in READ_ONLY_FIELDS
        }
        log = logger.bind(product_id=str(product_id))
        try:
            await self.find_product_or_throw(product_id)
            product = await self._write(product_id, data, operation="update")
        except Exception as exc:
            raise self._translator.translate(exc)

        log.info("product.updated", fields=sorted(data))
        return product

    async def remove(self, product_id: ProductId) -> Product:
        """Soft-delete a live product by flipping ``available`` to ``False``."""
        try:
            await self.find_product_or_throw(product_id)
            product = await self._write(
                product_id, {"available": False}, operation="remove"
            )
        except Exception as exc:
            raise self._translator.translate(exc)

        logger.info("product.soft_deleted", product_id=str(product_id))
        return product

    async def _write(
        self, product_id: ProductId, data: Dict[str, Any], *, operation: str
    ) -> Product:
        # Liveness was asserted by the caller: filter by id only.
        try:
            return await self._store.update(where={"id": product_id}, data=data)
        except StoreKnownRequestError as exc:
            if exc.code is StoreErrorCode.RECORD_NOT_FOUND:
                logger.warning(
                    "product.vanished_before_write",
                    product_id=str(product_id),
                    operation=operation,
                )
                raise ProductNotFound(product_id) from exc
            raise _internal(operation, exc) from exc
        except Exception as exc:
            raise _internal(operation, exc) from exc

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def find_all(self, pagination: PaginationDTO) -> PaginatedResult[Product]:
        """Return one page of the live set.

        Raises (through the translator):
            InvalidPage: ``page`` is past the last page.
        """
        page, limit = pagination.page, pagination.limit
        try:
            total_items, products = await self._page(page, limit)
        except Exception as exc:
            raise self._translator.translate(exc)

        return PaginatedResult(
            data=products,
            meta=PaginationMeta(
                total_items=total_items,
                total_pages=calculate_total_pages(total_items, limit),
                page=page,
                limit=limit,
            ),
        )

    async def _page(self, page: int, limit: int) -> Tuple[int, List[Product]]:
        try:
            await self._store.connect()
            total_items = await self._store.count(LIVE)
        except Exception as exc:
            raise _internal("find_all", exc) from exc

        total_pages = calculate_total_pages(total_items, limit)
        if page > total_pages:
            logger.info(
                "product.invalid_page", page=page, total_pages=total_pages
            )
            raise InvalidPage(page, total_pages)

        try:
            products = await self._store.find_many(
                skip=calculate_offset(page, limit), take=limit, where=LIVE
            )
        except Exception as exc:
            raise _internal("find_all", exc) from exc
        return total_items, products

    async def find_one(self, product_id: ProductId) -> Product:
        """Return a live product by id."""
        try:
            return await self.find_product_or_throw(product_id)
        except ProductError as exc:
            raise self._translator.translate(exc)
        except Exception as exc:
            raise self._translator.translate(_internal("find_one", exc))


def get_product_service(translator: Optional[ErrorTranslator] = None) -> ProductService:
    """Build a service over the process-wide store for one transport."""
    return ProductService(store=get_product_store(), translator=translator)
