"""In-memory storage backends for tests and local development."""

import copy
from typing import Any, Dict, Optional

from .storage import DurableCounter, DurableMap


class InMemoryMap(DurableMap):
    def __init__(self) -> None:
        self._items: Dict[int, Dict[str, Any]] = {}

    def get(self, key: int) -> Optional[Dict[str, Any]]:
        value = self._items.get(key)
        # Copies keep callers from mutating stored state in place
        return copy.deepcopy(value) if value is not None else None

    def insert(self, key: int, value: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        previous = self._items.get(key)
        self._items[key] = copy.deepcopy(value)
        return previous

    def remove(self, key: int) -> Optional[Dict[str, Any]]:
        return self._items.pop(key, None)

    def __len__(self) -> int:
        return len(self._items)


class InMemoryCounter(DurableCounter):
    def __init__(self, initial: int = 0) -> None:
        self._value = initial

    def get(self) -> int:
        return self._value

    def increment(self) -> int:
        self._value += 1
        return self._value
