import logging

from app.database.storage import DurableCounter

logger = logging.getLogger(__name__)


class IdAllocator:
    """Hands out unique event ids from a durable counter.

    Ids start at 0 and are never reused. The id is derived from the value the
    counter persisted, so a failed increment raises before any id is returned.
    """

    def __init__(self, counter: DurableCounter):
        self.counter = counter

    def next_id(self) -> int:
        new_value = self.counter.increment()
        event_id = new_value - 1
        logger.debug(f"Allocated event id {event_id}")
        return event_id
