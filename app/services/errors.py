"""Domain errors raised by the event service."""

from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "NotFound"
    NOT_AUTHORIZED = "NotAuthorized"
    ALREADY_ATTENDING = "AlreadyAttending"


class EventServiceError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(EventServiceError):
    """Raised when an event id does not exist."""

    code = ErrorCode.EVENT_NOT_FOUND

    def __init__(self, event_id: int, message: str | None = None) -> None:
        self.event_id = event_id
        super().__init__(message or f"Event with id={event_id} not found")


class NotAuthorizedError(EventServiceError):
    """Raised when the caller is not the owner of the event."""

    code = ErrorCode.NOT_AUTHORIZED

    def __init__(self, event_id: int, caller: str) -> None:
        self.event_id = event_id
        self.caller = caller
        super().__init__(f"You're not the owner of the event with id={event_id}")


class AlreadyAttendingError(EventServiceError):
    """Raised when the caller is already an attendee of the event."""

    code = ErrorCode.ALREADY_ATTENDING

    def __init__(self, event_id: int, caller: str) -> None:
        self.event_id = event_id
        self.caller = caller
        super().__init__(f"You are already an attendee of the event with id={event_id}")
