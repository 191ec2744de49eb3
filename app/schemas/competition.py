"""Competition request and response models.

Date rules that depend on "today" or on stored values are checked in the
service, so partial updates can be validated against the current record.
"""

import uuid
from datetime import datetime

from pydantic import Field, field_validator

from app.core.validators import check_length
from app.schemas.base import ChannelRef, RecordOut, RequestModel
from app.schemas.identity import PrincipalRef


class CompetitionCreate(RequestModel):
    channel_id: uuid.UUID
    title: str
    description: str = Field(min_length=1)
    start_date: datetime
    end_date: datetime

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        return check_length(v, "Title", max_length=100)


class CompetitionUpdate(RequestModel):
    title: str | None = None
    description: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str | None) -> str | None:
        return check_length(v, "Title", max_length=100) if v is not None else v


class SubmissionCreate(RequestModel):
    answer: str = Field(min_length=1)


class SubmissionOut(RecordOut):
    competition_id: uuid.UUID
    user_id: uuid.UUID
    user: PrincipalRef | None = None
    answer: str


class CompetitionOut(RecordOut):
    channel_id: uuid.UUID
    channel: ChannelRef | None = None
    title: str
    description: str
    start_date: datetime
    end_date: datetime


class CompetitionWithSubmissions(CompetitionOut):
    submissions: list[SubmissionOut] = Field(default_factory=list)


__all__ = [
    "CompetitionCreate",
    "CompetitionOut",
    "CompetitionUpdate",
    "CompetitionWithSubmissions",
    "SubmissionCreate",
    "SubmissionOut",
]
