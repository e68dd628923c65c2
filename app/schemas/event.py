from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime


MAX_FIELD_LENGTH = 1024


class EventPayload(BaseModel):
    """Mutable fields accepted on create and update"""

    model_config = ConfigDict(extra="forbid")

    event_title: str = Field(default="", max_length=MAX_FIELD_LENGTH)
    event_description: str = Field(default="", max_length=MAX_FIELD_LENGTH)
    event_location: str = Field(default="", max_length=MAX_FIELD_LENGTH)
    event_card_imgurl: str = Field(default="", max_length=MAX_FIELD_LENGTH)


class Event(EventPayload):
    model_config = ConfigDict(extra="ignore")

    id: int = Field(ge=0)
    owner: str
    attendees: List[str] = []
    created_at: datetime
    updated_at: Optional[datetime] = None


class ErrorOut(BaseModel):
    error: str
    message: str
    caller: Optional[str] = None
