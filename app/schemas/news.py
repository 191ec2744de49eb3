"""News request and response models."""

import uuid
from datetime import datetime
from typing import Any

from pydantic import field_validator

from app.core.validators import check_length
from app.schemas.base import ChannelRef, FormModel, RecordOut


def _title(v: str) -> str:
    return check_length(v, "Title", min_length=10, max_length=150)


def _description(v: str) -> str:
    return check_length(v, "Description", min_length=20, max_length=300)


def _content(v: str) -> str:
    return check_length(v, "Content", min_length=50)


class NewsCreate(FormModel):
    """News create form (``image`` file required)."""

    channel_id: uuid.UUID
    title: str
    description: str
    content: str
    published_at: datetime | None = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        return _title(v)

    @field_validator("description")
    @classmethod
    def check_description(cls, v: str) -> str:
        return _description(v)

    @field_validator("content")
    @classmethod
    def check_content(cls, v: str) -> str:
        return _content(v)


class NewsUpdate(FormModel):
    """Partial news update (``image`` file optional)."""

    channel_id: uuid.UUID | None = None
    title: str | None = None
    description: str | None = None
    content: str | None = None
    published_at: datetime | None = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str | None) -> str | None:
        return _title(v) if v is not None else v

    @field_validator("description")
    @classmethod
    def check_description(cls, v: str | None) -> str | None:
        return _description(v) if v is not None else v

    @field_validator("content")
    @classmethod
    def check_content(cls, v: str | None) -> str | None:
        return _content(v) if v is not None else v


class NewsOut(RecordOut):
    channel_id: uuid.UUID
    channel: ChannelRef | None = None
    title: str
    image: dict[str, Any]
    description: str
    content: str
    published_at: datetime | None = None


__all__ = ["NewsCreate", "NewsOut", "NewsUpdate"]
