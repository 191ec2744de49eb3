"""Track submission request and response models."""

import uuid
from datetime import date, datetime
from typing import Any

from pydantic import Field, field_validator

from app.core.validators import normalize_time, parse_string_list
from app.models.upload_track import Genre, TrackStatus
from app.schemas.base import ChannelRef, FormModel, RecordOut, RequestModel, ResponseModel
from app.schemas.identity import PrincipalRef

GENRE_REQUIRED = "Genre must be an array with at least one genre"


class TrackSubmission(FormModel):
    """Track upload form (``songFile`` audio or video file required).

    ``genre`` may arrive as a JSON array string, repeated form fields or a
    single value. Any value outside the vocabulary rejects the submission.
    """

    channel_id: uuid.UUID
    song_name: str = Field(min_length=1)
    genre: list[Genre]

    @field_validator("genre", mode="before")
    @classmethod
    def parse_genre(cls, v: Any) -> list[str]:
        try:
            values = parse_string_list(v)
        except ValueError as e:
            raise ValueError(GENRE_REQUIRED) from e
        if not values:
            raise ValueError(GENRE_REQUIRED)
        return values


class TrackStatusUpdate(RequestModel):
    status: TrackStatus


class TrackApproval(RequestModel):
    """Broadcast slot for an approved track."""

    date: date
    time: str

    @field_validator("time")
    @classmethod
    def check_time(cls, v: str) -> str:
        return normalize_time(v)


class TrackFilters(RequestModel):
    """Staff list query parameters."""

    status: TrackStatus | None = None
    channel_id: uuid.UUID | None = None
    user_id: uuid.UUID | None = None


class ApprovalOut(ResponseModel):
    """Slot created by an approval."""

    id: uuid.UUID
    channel_id: uuid.UUID
    track_id: uuid.UUID
    date: date
    time: str


class TrackOut(RecordOut):
    channel_id: uuid.UUID
    channel: ChannelRef | None = None
    user_id: uuid.UUID
    user: PrincipalRef | None = None
    admin_id: uuid.UUID | None = None
    admin: PrincipalRef | None = None
    song_name: str
    song_file: dict[str, Any]
    genre: list[str]
    status: TrackStatus
    week_start: datetime | None = None


class TrackSummary(ResponseModel):
    """Track fields shown in the public broadcast schedule."""

    id: uuid.UUID
    song_name: str
    song_file: dict[str, Any]
    genre: list[str]
    user: PrincipalRef | None = None


class ApprovedTrackOut(RecordOut):
    channel_id: uuid.UUID
    channel: ChannelRef | None = None
    track_id: uuid.UUID
    track: TrackSummary | None = None
    date: date
    time: str


__all__ = [
    "ApprovalOut",
    "ApprovedTrackOut",
    "GENRE_REQUIRED",
    "TrackApproval",
    "TrackFilters",
    "TrackOut",
    "TrackStatusUpdate",
    "TrackSummary",
    "TrackSubmission",
]
