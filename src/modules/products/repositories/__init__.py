"""Product repositories package."""

from functools import lru_cache

from modules.products.repositories.django_repository import ProductDjangoStore
from modules.products.repositories.interfaces import IProductStore

__all__ = ["IProductStore", "ProductDjangoStore", "get_product_store"]


@lru_cache(maxsize=None)
def get_product_store() -> IProductStore:
    """Return the process-wide product store shared by every transport."""
    return ProductDjangoStore()
