"""Event request and response models."""

import uuid
from datetime import datetime
from typing import Any

from pydantic import field_validator, model_validator

from app.core.validators import check_length
from app.core.week import as_local
from app.models.event import EventType
from app.schemas.base import ChannelRef, FormModel, RecordOut

END_BEFORE_START = "End date cannot be before start date"


class EventCreate(FormModel):
    """Event create form (``image`` file required)."""

    channel_id: uuid.UUID
    type: EventType
    title: str
    description: str
    start_date: datetime
    end_date: datetime
    address: str

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        return check_length(v, "Title", max_length=200)

    @field_validator("description")
    @classmethod
    def check_description(cls, v: str) -> str:
        return check_length(v, "Description", max_length=1000)

    @field_validator("address")
    @classmethod
    def check_address(cls, v: str) -> str:
        return check_length(v, "Address", max_length=300)

    @model_validator(mode="after")
    def check_dates(self) -> "EventCreate":
        if as_local(self.end_date) < as_local(self.start_date):
            raise ValueError(END_BEFORE_START)
        return self


class EventUpdate(FormModel):
    """Partial event update (``image`` file optional)."""

    channel_id: uuid.UUID | None = None
    type: EventType | None = None
    title: str | None = None
    description: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    address: str | None = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str | None) -> str | None:
        return check_length(v, "Title", max_length=200) if v is not None else v

    @field_validator("description")
    @classmethod
    def check_description(cls, v: str | None) -> str | None:
        return check_length(v, "Description", max_length=1000) if v is not None else v

    @field_validator("address")
    @classmethod
    def check_address(cls, v: str | None) -> str | None:
        return check_length(v, "Address", max_length=300) if v is not None else v


class EventOut(RecordOut):
    channel_id: uuid.UUID
    channel: ChannelRef | None = None
    type: EventType
    title: str
    description: str
    start_date: datetime
    end_date: datetime
    address: str
    image: dict[str, Any]


__all__ = ["END_BEFORE_START", "EventCreate", "EventOut", "EventUpdate"]
