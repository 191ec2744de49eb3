"""StaticInfo request and response models."""

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.validators import parse_json_field, validate_email_format
from app.schemas.base import ChannelRef, FormModel, RecordOut

DOWNLOAD_APP_ERROR = "downloadApp must contain both AppStore and GooglePlay links"


class DownloadApp(BaseModel):
    """Store links for the station app."""

    model_config = ConfigDict(extra="allow")

    AppStore: str
    GooglePlay: str


def _parse_social(value: Any) -> Any:
    try:
        return parse_json_field(value, "social media links")
    except ValueError as e:
        raise ValueError("Invalid social media links format") from e


def _parse_download(value: Any) -> Any:
    try:
        value = parse_json_field(value, "download app")
    except ValueError as e:
        raise ValueError("Invalid download app format") from e
    if isinstance(value, dict) and not (value.get("AppStore") and value.get("GooglePlay")):
        raise ValueError(DOWNLOAD_APP_ERROR)
    return value


class StaticInfoCreate(FormModel):
    """StaticInfo create form (``frequencyimg`` and ``favIcon`` files required)."""

    channel_id: uuid.UUID
    about_us: str = Field(alias="aboutUS", min_length=1)
    frequency: str = Field(min_length=1)
    social_media_links: dict[str, Any]
    download_app: DownloadApp
    meta_tags: str = Field(min_length=1)
    meta_description: str = Field(min_length=1)
    phone_number: str = Field(min_length=1)
    email: str
    address: str = Field(min_length=1)

    @field_validator("social_media_links", mode="before")
    @classmethod
    def parse_social(cls, v: Any) -> Any:
        return _parse_social(v)

    @field_validator("download_app", mode="before")
    @classmethod
    def parse_download(cls, v: Any) -> Any:
        return _parse_download(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return validate_email_format(v)


class StaticInfoUpdate(FormModel):
    """Partial StaticInfo update (both files optional)."""

    channel_id: uuid.UUID | None = None
    about_us: str | None = Field(default=None, alias="aboutUS")
    frequency: str | None = None
    social_media_links: dict[str, Any] | None = None
    download_app: DownloadApp | None = None
    meta_tags: str | None = None
    meta_description: str | None = None
    phone_number: str | None = None
    email: str | None = None
    address: str | None = None

    @field_validator("social_media_links", mode="before")
    @classmethod
    def parse_social(cls, v: Any) -> Any:
        return _parse_social(v)

    @field_validator("download_app", mode="before")
    @classmethod
    def parse_download(cls, v: Any) -> Any:
        return _parse_download(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str | None) -> str | None:
        return validate_email_format(v) if v is not None else v


class StaticInfoOut(RecordOut):
    channel_id: uuid.UUID
    channel: ChannelRef | None = None
    about_us: str = Field(alias="aboutUS")
    frequency: str
    frequency_image: dict[str, Any] = Field(alias="frequencyimg")
    social_media_links: dict[str, Any]
    download_app: dict[str, Any]
    meta_tags: str
    meta_description: str
    fav_icon: dict[str, Any]
    phone_number: str
    email: str
    address: str


__all__ = [
    "DOWNLOAD_APP_ERROR",
    "DownloadApp",
    "StaticInfoCreate",
    "StaticInfoOut",
    "StaticInfoUpdate",
]
