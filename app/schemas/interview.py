"""Interview and interview applicant request and response models."""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.validators import (
    check_length,
    normalize_phone_number,
    parse_json_field,
    validate_email_format,
)
from app.models.interview import ApplicantStatus
from app.schemas.base import ChannelRef, FormModel, RecordOut, RequestModel
from app.schemas.program import ProgramRef


class InterviewCreate(FormModel):
    """Interview create form (``content`` video file required)."""

    channel_id: uuid.UUID
    program_id: uuid.UUID
    title: str = Field(min_length=1)
    date: datetime
    description: str = Field(min_length=1)


class InterviewUpdate(FormModel):
    """Partial interview update (``content`` video file optional)."""

    channel_id: uuid.UUID | None = None
    program_id: uuid.UUID | None = None
    title: str | None = None
    date: datetime | None = None
    description: str | None = None


class InterviewOut(RecordOut):
    channel_id: uuid.UUID
    channel: ChannelRef | None = None
    program_id: uuid.UUID
    program: ProgramRef | None = None
    title: str
    date: datetime
    content: dict[str, Any]
    description: str


class ApplicantLinks(BaseModel):
    """Applicant profile links, each 5-100 characters when present."""

    model_config = ConfigDict(extra="ignore")

    ig: str | None = None
    fb: str | None = None
    twitter: str | None = None

    @field_validator("ig", "fb", "twitter")
    @classmethod
    def check_link(cls, v: str | None) -> str | None:
        return check_length(v, "Social link", min_length=5, max_length=100) if v else None


class ApplicantCreate(RequestModel):
    """Public interview application."""

    channel_id: uuid.UUID
    name: str
    email: str
    phone_number: str
    topic: str
    job: str
    social_links: ApplicantLinks = Field(default_factory=ApplicantLinks)

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return check_length(v, "Name", min_length=2, max_length=50)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return validate_email_format(v)

    @field_validator("phone_number")
    @classmethod
    def check_phone(cls, v: str) -> str:
        return normalize_phone_number(v)

    @field_validator("topic")
    @classmethod
    def check_topic(cls, v: str) -> str:
        return check_length(v, "Topic", min_length=5, max_length=100)

    @field_validator("job")
    @classmethod
    def check_job(cls, v: str) -> str:
        return check_length(v, "Job", min_length=2, max_length=100)

    @field_validator("social_links", mode="before")
    @classmethod
    def parse_links(cls, v: Any) -> Any:
        return parse_json_field(v, "socialLinks")


class ApplicantStatusUpdate(RequestModel):
    status: ApplicantStatus

    @field_validator("status", mode="before")
    @classmethod
    def lowercase_status(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v


class ApplicantOut(RecordOut):
    channel_id: uuid.UUID
    channel: ChannelRef | None = None
    name: str
    email: str
    phone_number: str
    topic: str
    job: str
    social_links: dict[str, Any] = Field(default_factory=dict)
    status: ApplicantStatus


__all__ = [
    "ApplicantCreate",
    "ApplicantLinks",
    "ApplicantOut",
    "ApplicantStatusUpdate",
    "InterviewCreate",
    "InterviewOut",
    "InterviewUpdate",
]
