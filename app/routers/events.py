import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, Path, Request

from app.config import Settings, get_settings
from app.database.dynamodb import DynamoDBCounter, DynamoDBMap, get_db_connection
from app.database.memory import InMemoryCounter, InMemoryMap
from app.database.storage import StorageError
from app.schemas.event import ErrorOut, Event, EventPayload
from app.services.errors import ErrorCode, EventServiceError
from app.services.event_service import EventService
from app.services.event_store import EventStore
from app.services.id_allocator import IdAllocator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["events"])

ERROR_RESPONSES = {
    401: {"description": "Missing caller identity"},
    403: {"model": ErrorOut, "description": "Caller is not the owner"},
    404: {"model": ErrorOut, "description": "Event not found"},
    409: {"model": ErrorOut, "description": "Caller is already attending"},
}

STATUS_CODES = {
    ErrorCode.EVENT_NOT_FOUND: 404,
    ErrorCode.NOT_AUTHORIZED: 403,
    ErrorCode.ALREADY_ATTENDING: 409,
}


def build_event_service(settings: Settings) -> EventService:
    """Wire the service to the configured storage backend"""
    if settings.backend == "memory":
        storage, counter = InMemoryMap(), InMemoryCounter()
    else:
        db = get_db_connection(settings)
        storage = DynamoDBMap(db, settings.table_name)
        counter = DynamoDBCounter(db, settings.table_name)

    logger.info(f"Using {settings.backend} event storage")
    return EventService(EventStore(storage), IdAllocator(counter))


@lru_cache
def get_event_service() -> EventService:
    """Dependency to get the shared EventService instance"""
    return build_event_service(get_settings())


def get_caller(request: Request) -> str:
    """Dependency returning the caller identity set by the hosting environment"""
    header = get_settings().caller_id_header
    caller = request.headers.get(header)
    if not caller:
        raise HTTPException(status_code=401, detail=f"Missing {header} header")
    return caller


def _to_http(error: EventServiceError) -> HTTPException:
    status_code = STATUS_CODES[error.code]
    detail = ErrorOut(
        error=error.code.value,
        message=error.message,
        caller=getattr(error, "caller", None),
    )
    return HTTPException(status_code=status_code, detail=detail.model_dump())


def _storage_failure(e: StorageError) -> HTTPException:
    logger.exception("Event storage failure")
    return HTTPException(status_code=500, detail=str(e))


@router.get("/{event_id}", response_model=Event, responses=ERROR_RESPONSES)
def get_event(
    event_id: int = Path(ge=0),
    event_service: EventService = Depends(get_event_service),
):
    """Get a single event by id"""
    try:
        return event_service.get_event(event_id)
    except EventServiceError as e:
        raise _to_http(e)
    except StorageError as e:
        raise _storage_failure(e)


@router.post("/", response_model=Event, status_code=201, responses=ERROR_RESPONSES)
def create_event(
    payload: EventPayload,
    caller: str = Depends(get_caller),
    event_service: EventService = Depends(get_event_service),
):
    """Create a new event owned by the caller"""
    try:
        return event_service.create_event(payload, caller)
    except StorageError as e:
        raise _storage_failure(e)


@router.put("/{event_id}", response_model=Event, responses=ERROR_RESPONSES)
def update_event(
    payload: EventPayload,
    event_id: int = Path(ge=0),
    caller: str = Depends(get_caller),
    event_service: EventService = Depends(get_event_service),
):
    """Update an event; only its owner may do so"""
    try:
        return event_service.update_event(event_id, payload, caller)
    except EventServiceError as e:
        raise _to_http(e)
    except StorageError as e:
        raise _storage_failure(e)


@router.post("/{event_id}/attend", response_model=Event, responses=ERROR_RESPONSES)
def attend_event(
    event_id: int = Path(ge=0),
    caller: str = Depends(get_caller),
    event_service: EventService = Depends(get_event_service),
):
    """Add the caller to the attendees of an event"""
    try:
        return event_service.attend_event(event_id, caller)
    except EventServiceError as e:
        raise _to_http(e)
    except StorageError as e:
        raise _storage_failure(e)


@router.delete("/{event_id}", response_model=Event, responses=ERROR_RESPONSES)
def delete_event(
    event_id: int = Path(ge=0),
    caller: str = Depends(get_caller),
    event_service: EventService = Depends(get_event_service),
):
    """Delete an event; only its owner may do so"""
    try:
        return event_service.delete_event(event_id, caller)
    except EventServiceError as e:
        raise _to_http(e)
    except StorageError as e:
        raise _storage_failure(e)
