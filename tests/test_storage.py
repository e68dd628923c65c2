"""Unit tests for the id allocator, event store, owner check and in-memory backends."""

from datetime import datetime, timezone

import pytest

from app.database.memory import InMemoryCounter, InMemoryMap
from app.database.storage import DurableCounter, StorageError
from app.schemas.event import Event
from app.services.authorization import is_owner
from app.services.event_store import EventStore
from app.services.id_allocator import IdAllocator


def make_event(event_id: int = 0, owner: str = "alice", **kwargs) -> Event:
    kwargs.setdefault("event_title", "Meetup")
    kwargs.setdefault("created_at", datetime(2024, 1, 1, tzinfo=timezone.utc))
    return Event(id=event_id, owner=owner, **kwargs)


class FailingCounter(DurableCounter):
    def get(self) -> int:
        return 0

    def increment(self) -> int:
        raise StorageError("counter unavailable")


def test_allocator_starts_at_zero():
    counter = InMemoryCounter()
    allocator = IdAllocator(counter)

    assert [allocator.next_id() for _ in range(3)] == [0, 1, 2]
    assert counter.get() == 3


def test_allocator_continues_from_persisted_value():
    """A restarted allocator picks up where the durable counter left off."""
    counter = InMemoryCounter()
    IdAllocator(counter).next_id()
    IdAllocator(counter).next_id()

    assert IdAllocator(counter).next_id() == 2


def test_allocator_propagates_counter_failure():
    allocator = IdAllocator(FailingCounter())

    with pytest.raises(StorageError):
        allocator.next_id()


def test_store_round_trip():
    store = EventStore(InMemoryMap())
    event = make_event(attendees=["bob"])

    store.insert(event)

    assert store.get(0) == event


def test_store_get_missing_returns_none():
    assert EventStore(InMemoryMap()).get(5) is None


def test_store_insert_overwrites():
    store = EventStore(InMemoryMap())
    store.insert(make_event())
    store.insert(make_event(event_title="Renamed"))

    assert store.get(0).event_title == "Renamed"


def test_store_remove_returns_previous_value():
    store = EventStore(InMemoryMap())
    event = make_event()
    store.insert(event)

    assert store.remove(0) == event
    assert store.get(0) is None
    assert store.remove(0) is None


def test_store_serializes_to_json_compatible_dict():
    storage = InMemoryMap()
    EventStore(storage).insert(make_event(event_id=3))

    item = storage.get(3)
    assert item["id"] == 3
    assert item["created_at"].startswith("2024-01-01T00:00:00")
    assert item["updated_at"] is None
    assert item["attendees"] == []


def test_memory_map_returns_copies():
    storage = InMemoryMap()
    storage.insert(1, {"attendees": ["a"]})

    storage.get(1)["attendees"].append("b")

    assert storage.get(1) == {"attendees": ["a"]}
    assert len(storage) == 1


def test_memory_map_insert_returns_previous():
    storage = InMemoryMap()

    assert storage.insert(1, {"v": 1}) is None
    assert storage.insert(1, {"v": 2}) == {"v": 1}


def test_is_owner_exact_match():
    event = make_event(owner="alice")

    assert is_owner(event, "alice") is True
    assert is_owner(event, "Alice") is False
    assert is_owner(event, "alice ") is False
    assert is_owner(event, "") is False
