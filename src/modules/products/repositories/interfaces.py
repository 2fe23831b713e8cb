"""Product store interface.

Specialises ``IStore[Product]`` for the catalog.  Recognised ``where``
keys are ``id`` and ``available``; the service layer always scopes
reads to ``available=True``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IStore

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductStore(IStore["Product"]):
    """Store contract for the Product entity."""
