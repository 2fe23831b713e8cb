"""Generic store interface (Dependency Inversion Principle).

Provides ``IStore[T]``, the asynchronous capability every entity store
implements, plus the tagged error the store raises for conditions the
service layer knows how to act on.  Service-layer code depends on this
abstraction, never on Django ORM directly.

``where`` arguments are plain mappings of field names to values, e.g.
``{"id": 1, "available": True}``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Generic, List, Mapping, Optional, TypeVar

T = TypeVar("T")


class StoreErrorCode(str, Enum):
    """Known request error codes a store may signal."""

    INVALID_IDENTIFIER = "invalid_identifier"
    RECORD_NOT_FOUND = "record_not_found"


class StoreKnownRequestError(Exception):
    """A store failure tagged with a recognised ``StoreErrorCode``.

    Any other exception raised by a store is an untagged failure.
    """

    def __init__(self, code: StoreErrorCode, message: str = "") -> None:
        super().__init__(message or code.value)
        self.code = code


class IStore(ABC, Generic[T]):
    """Base generic store contract.

    Type parameter ``T`` represents the entity managed by the store
    (e.g. ``Product``).  ``connect`` must be idempotent.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Establish the underlying connection (no-op when already connected)."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the underlying connection."""

    @abstractmethod
    async def find_unique(self, where: Mapping[str, Any]) -> Optional[T]:
        """Return the single entity matching ``where`` or ``None``."""

    @abstractmethod
    async def find_many(
        self, *, skip: int, take: int, where: Mapping[str, Any]
    ) -> List[T]:
        """Return at most ``take`` entities matching ``where`` after ``skip``."""

    @abstractmethod
    async def count(self, where: Mapping[str, Any]) -> int:
        """Count entities matching ``where``."""

    @abstractmethod
    async def create(self, data: Mapping[str, Any]) -> T:
        """Persist a new entity built from ``data``."""

    @abstractmethod
    async def update(self, *, where: Mapping[str, Any], data: Mapping[str, Any]) -> T:
        """Apply ``data`` to the entity matching ``where``.

        Raises:
            StoreKnownRequestError: ``RECORD_NOT_FOUND`` when nothing matches.
        """
