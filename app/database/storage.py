"""Durable storage interfaces.

The service keeps its state in two primitives: a map from numeric id to a
serialized record, and a monotonic counter cell. Backends must be swappable
and durable on return.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class StorageError(Exception):
    """Raised when the underlying durable storage fails."""


class DurableMap(ABC):
    """Crash-durable mapping from an integer key to a serialized record."""

    @abstractmethod
    def get(self, key: int) -> Optional[Dict[str, Any]]:
        """Return the value stored under key, or None."""
        ...

    @abstractmethod
    def insert(self, key: int, value: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Store value under key, replacing any previous value.

        Returns the previous value, or None if the key was absent.
        """
        ...

    @abstractmethod
    def remove(self, key: int) -> Optional[Dict[str, Any]]:
        """Remove key and return its previous value, or None if absent."""
        ...


class DurableCounter(ABC):
    """Crash-durable monotonic integer cell."""

    @abstractmethod
    def get(self) -> int:
        """Return the current value (0 if never written)."""
        ...

    @abstractmethod
    def increment(self) -> int:
        """Atomically add one and return the value after the increment."""
        ...
