from typing import Optional

from app.database.storage import DurableMap
from app.schemas.event import Event


class EventStore:
    """Typed access to events held in a durable map, keyed by event id"""

    def __init__(self, storage: DurableMap):
        self.storage = storage

    def get(self, event_id: int) -> Optional[Event]:
        item = self.storage.get(event_id)
        if item is None:
            return None
        return Event.model_validate(item)

    def insert(self, event: Event) -> None:
        """Insert or overwrite the record stored under event.id"""
        self.storage.insert(event.id, event.model_dump(mode="json"))

    def remove(self, event_id: int) -> Optional[Event]:
        item = self.storage.remove(event_id)
        if item is None:
            return None
        return Event.model_validate(item)
