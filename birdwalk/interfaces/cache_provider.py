"""Abstract base class for cache service providers.

Defines the contract for the key-value cache that fronts species image
lookups.  Implementations may use an in-memory map, SQLite, Redis, or any
other backend; the resolution service only talks to this interface.

Cached values may legitimately be ``None`` ("this bird has no picture"),
so ``get`` returns a :class:`CacheEntry` wrapper instead of the bare value.
A ``None`` return from ``get`` always means "not cached".
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """A stored value together with the time it was written.

    Attributes
    ----------
    value:
        The cached value.  ``None`` is a valid, cached answer.
    stored_at:
        Timer reading (seconds) at the moment the value was stored.
    """

    value: Any
    stored_at: float


class ICacheProvider(ABC):
    """Contract for key-value cache services.

    All operations are async to allow for network-backed stores (e.g. Redis)
    without blocking the event loop.
    """

    @abstractmethod
    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve the entry stored under *key*.

        Returns
        -------
        CacheEntry or None
            The entry if present and not expired; ``None`` otherwise.
        """

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*, stamped with the current time.

        Parameters
        ----------
        key:
            The cache key.
        value:
            The value to store.  ``None`` is stored like any other value.
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove the entry stored under *key*.  No-op if absent."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present in the cache and not expired."""
