from .event import ErrorOut, Event, EventPayload

__all__ = [
    "Event",
    "EventPayload",
    "ErrorOut",
]
