"""Program request and response models."""

import uuid
from typing import Any

from pydantic import field_validator, model_validator

from app.core.validators import check_length, normalize_time, time_to_minutes
from app.models.program import ProgramStatus, Weekday
from app.schemas.base import ChannelRef, FormModel, RecordOut

END_BEFORE_START = "End time must be after start time"
DAY_ERROR = "Day must be one of: " + ", ".join(day.value for day in Weekday)
STATUS_ERROR = "Status must be either 'active' or 'inactive'"


def _check_day(value: Any) -> Any:
    if isinstance(value, str) and value not in {day.value for day in Weekday}:
        raise ValueError(DAY_ERROR)
    return value


def _check_status(value: Any) -> Any:
    if isinstance(value, str) and value not in {status.value for status in ProgramStatus}:
        raise ValueError(STATUS_ERROR)
    return value


class ProgramCreate(FormModel):
    """Program create form (``image`` file required)."""

    channel_id: uuid.UUID
    title: str
    description: str
    day: Weekday
    start_time: str
    end_time: str
    status: ProgramStatus = ProgramStatus.ACTIVE

    @field_validator("description")
    @classmethod
    def check_description(cls, v: str) -> str:
        return check_length(v, "Description", max_length=100)

    @field_validator("day", mode="before")
    @classmethod
    def check_day(cls, v: Any) -> Any:
        return _check_day(v)

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v: Any) -> Any:
        return _check_status(v)

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, v: str) -> str:
        return normalize_time(v)

    @model_validator(mode="after")
    def check_order(self) -> "ProgramCreate":
        if time_to_minutes(self.end_time) <= time_to_minutes(self.start_time):
            raise ValueError(END_BEFORE_START)
        return self


class ProgramUpdate(FormModel):
    """Partial program update (``image`` file optional).

    When only one of the two times is supplied, the ordering check against
    the stored value happens in the service.
    """

    channel_id: uuid.UUID | None = None
    title: str | None = None
    description: str | None = None
    day: Weekday | None = None
    start_time: str | None = None
    end_time: str | None = None
    status: ProgramStatus | None = None

    @field_validator("description")
    @classmethod
    def check_description(cls, v: str | None) -> str | None:
        return check_length(v, "Description", max_length=100) if v is not None else v

    @field_validator("day", mode="before")
    @classmethod
    def check_day(cls, v: Any) -> Any:
        return _check_day(v)

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v: Any) -> Any:
        return _check_status(v)

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, v: str | None) -> str | None:
        return normalize_time(v) if v is not None else v


class ProgramOut(RecordOut):
    channel_id: uuid.UUID
    channel: ChannelRef | None = None
    title: str
    image: dict[str, Any]
    description: str
    day: Weekday
    start_time: str
    end_time: str
    status: ProgramStatus


class ProgramRef(RecordOut):
    title: str


__all__ = [
    "END_BEFORE_START",
    "ProgramCreate",
    "ProgramOut",
    "ProgramRef",
    "ProgramUpdate",
]
