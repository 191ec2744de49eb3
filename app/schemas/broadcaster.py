"""Broadcaster request and response models."""

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.validators import check_length, parse_json_field
from app.schemas.base import ChannelRef, FormModel, RecordOut


class BroadcasterLinks(BaseModel):
    """Presenter profile links."""

    model_config = ConfigDict(extra="ignore")

    ig: str | None = None
    FB: str | None = None
    YT: str | None = None


def _parse_links(value: Any) -> Any:
    return parse_json_field(value, "socialLinks")


class BroadcasterCreate(FormModel):
    """Broadcaster create form (``image`` file required)."""

    channel_id: uuid.UUID
    name: str
    social_links: BroadcasterLinks = Field(default_factory=BroadcasterLinks)
    description: str = ""

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return check_length(v, "Name", max_length=50)

    @field_validator("description")
    @classmethod
    def check_description(cls, v: str) -> str:
        return check_length(v, "Description", max_length=1000)

    @field_validator("social_links", mode="before")
    @classmethod
    def parse_links(cls, v: Any) -> Any:
        return _parse_links(v)


class BroadcasterUpdate(FormModel):
    """Partial broadcaster update (``image`` file optional)."""

    channel_id: uuid.UUID | None = None
    name: str | None = None
    social_links: BroadcasterLinks | None = None
    description: str | None = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str | None) -> str | None:
        return check_length(v, "Name", max_length=50) if v is not None else v

    @field_validator("description")
    @classmethod
    def check_description(cls, v: str | None) -> str | None:
        return check_length(v, "Description", max_length=1000) if v is not None else v

    @field_validator("social_links", mode="before")
    @classmethod
    def parse_links(cls, v: Any) -> Any:
        return _parse_links(v)


class BroadcasterOut(RecordOut):
    channel_id: uuid.UUID
    channel: ChannelRef | None = None
    name: str
    image: dict[str, Any]
    social_links: dict[str, Any] = Field(default_factory=dict)
    description: str = ""


__all__ = [
    "BroadcasterCreate",
    "BroadcasterLinks",
    "BroadcasterOut",
    "BroadcasterUpdate",
]
