"""Advertisement request and response models."""

import uuid

from pydantic import field_validator

from app.core.validators import check_length, normalize_phone_number, validate_email_format
from app.schemas.base import ChannelRef, RecordOut, RequestModel


class AdvertisementCreate(RequestModel):
    """Public advertising enquiry."""

    channel_id: uuid.UUID
    name: str
    email: str
    phone_number: str
    message: str

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return check_length(v, "Name", max_length=100)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return validate_email_format(check_length(v, "Email", max_length=100))

    @field_validator("phone_number")
    @classmethod
    def check_phone(cls, v: str) -> str:
        return normalize_phone_number(v)

    @field_validator("message")
    @classmethod
    def check_message(cls, v: str) -> str:
        return check_length(v, "Message", max_length=500)


class AdvertisementOut(RecordOut):
    channel_id: uuid.UUID
    channel: ChannelRef | None = None
    name: str
    email: str
    phone_number: str
    message: str


__all__ = ["AdvertisementCreate", "AdvertisementOut"]
