"""Page-based pagination primitives.

``total_pages`` is never below 1 so that page 1 of an empty live set is
a valid (empty) page rather than an error.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, TypeVar

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 10


def calculate_total_pages(total_items: int, limit: int) -> int:
    """Return ``max(1, ceil(total_items / limit))``."""
    if limit < 1:
        raise ValueError("limit must be a positive integer.")
    return max(1, math.ceil(total_items / limit))


def calculate_offset(page: int, limit: int) -> int:
    """Number of rows to skip to reach ``page``."""
    return (page - 1) * limit


@dataclass(frozen=True)
class PaginationMeta:
    total_items: int
    total_pages: int
    page: int
    limit: int

    def to_dict(self) -> Dict[str, int]:
        """Wire representation shared by the HTTP and RPC transports."""
        return {
            "totalItems": self.total_items,
            "totalPages": self.total_pages,
            "page": self.page,
            "limit": self.limit,
        }


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    data: List[T]
    meta: PaginationMeta

    def to_dict(self, serialize: Callable[[T], R]) -> Dict[str, Any]:
        return {
            "data": [serialize(item) for item in self.data],
            "meta": self.meta.to_dict(),
        }
