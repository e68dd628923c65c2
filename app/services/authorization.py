from app.schemas.event import Event


def is_owner(event: Event, caller: str) -> bool:
    """Whether caller is the identity that created the event"""
    return event.owner == caller
