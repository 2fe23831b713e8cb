"""Product domain exceptions.

Raised by the Service Layer independently of any transport.  Each
transport plugs an error translator into the service
(``modules.products.translators``) that turns these into its own
exception shape.
"""

from __future__ import annotations

from typing import Union

ProductId = Union[int, str]


class ProductError(Exception):
    """Base class for every error the product service raises."""


class ProductNotFound(ProductError):
    """The requested product does not exist or has been soft-deleted."""

    def __init__(self, product_id: ProductId) -> None:
        super().__init__(f"Product with id {product_id} not found.")
        self.product_id = product_id


class InvalidProductId(ProductError):
    """The store rejected the identifier as malformed."""

    def __init__(self, product_id: ProductId) -> None:
        super().__init__(f"Product id {product_id!r} is not valid.")
        self.product_id = product_id


class InvalidPage(ProductError):
    """The requested page is past the last page of the live set."""

    def __init__(self, page: int, total_pages: int) -> None:
        super().__init__(
            f"Page {page} does not exist. The last page is {total_pages}."
        )
        self.page = page
        self.total_pages = total_pages


class ProductInternalError(ProductError):
    """An unanticipated store or runtime failure.

    ``cause`` is kept for operators only and must never reach a caller.
    """

    def __init__(self, cause: BaseException) -> None:
        super().__init__("Internal error while processing the product.")
        self.cause = cause
