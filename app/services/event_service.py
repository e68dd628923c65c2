import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Optional

from app.schemas.event import Event, EventPayload
from app.services.authorization import is_owner
from app.services.errors import (
    AlreadyAttendingError,
    EventNotFoundError,
    NotAuthorizedError,
)
from app.services.event_store import EventStore
from app.services.id_allocator import IdAllocator

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EventService:
    """Event operations, each gated by the caller's identity where it mutates.

    Every operation runs to completion under one lock, so the
    read-check-write sequences below never interleave within a process.
    """

    def __init__(
        self,
        store: EventStore,
        allocator: IdAllocator,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.allocator = allocator
        self.clock = clock or utc_now
        self._lock = threading.Lock()

    def _get_existing(self, event_id: int, message: Optional[str] = None) -> Event:
        event = self.store.get(event_id)
        if event is None:
            raise EventNotFoundError(event_id, message)
        return event

    def get_event(self, event_id: int) -> Event:
        """Return an event by id.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        with self._lock:
            return self._get_existing(event_id)

    def create_event(self, payload: EventPayload, caller: str) -> Event:
        """Create an event owned by caller"""
        with self._lock:
            event = Event(
                id=self.allocator.next_id(),
                owner=caller,
                attendees=[],
                created_at=self.clock(),
                updated_at=None,
                **payload.model_dump(),
            )
            self.store.insert(event)

        logger.info(f"Event {event.id} created by {caller}")
        return event

    def update_event(self, event_id: int, payload: EventPayload, caller: str) -> Event:
        """Overwrite the mutable fields of an event.

        Raises:
            EventNotFoundError: If the event does not exist.
            NotAuthorizedError: If caller is not the owner.
        """
        with self._lock:
            event = self._get_existing(
                event_id,
                f"couldn't update an event with id={event_id}. event not found",
            )
            if not is_owner(event, caller):
                logger.warning(f"Update of event {event_id} refused for {caller}")
                raise NotAuthorizedError(event_id, caller)

            updated = event.model_copy(
                update={**payload.model_dump(), "updated_at": self.clock()}
            )
            self.store.insert(updated)

        logger.info(f"Event {event_id} updated by {caller}")
        return updated

    def attend_event(self, event_id: int, caller: str) -> Event:
        """Add caller to the attendees of an event.

        updated_at is left as is; only update_event sets it.

        Raises:
            EventNotFoundError: If the event does not exist.
            AlreadyAttendingError: If caller is already an attendee.
        """
        with self._lock:
            event = self._get_existing(
                event_id,
                f"Couldn't update an event with id={event_id}. Event not found",
            )
            if caller in event.attendees:
                logger.warning(f"{caller} is already attending event {event_id}")
                raise AlreadyAttendingError(event_id, caller)

            updated = event.model_copy(update={"attendees": [*event.attendees, caller]})
            self.store.insert(updated)

        logger.info(f"{caller} is attending event {event_id}")
        return updated

    def delete_event(self, event_id: int, caller: str) -> Event:
        """Remove an event and return the removed record.

        Raises:
            EventNotFoundError: If the event does not exist.
            NotAuthorizedError: If caller is not the owner.
        """
        with self._lock:
            event = self._get_existing(
                event_id,
                f"couldn't delete an event with id={event_id}. event not found",
            )
            if not is_owner(event, caller):
                logger.warning(f"Deletion of event {event_id} refused for {caller}")
                raise NotAuthorizedError(event_id, caller)

            removed = self.store.remove(event_id)
            if removed is None:
                raise EventNotFoundError(event_id)

        logger.info(f"Event {event_id} deleted by {caller}")
        return removed
