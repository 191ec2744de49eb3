"""Base request and response models.

Request bodies and responses use camelCase field names on the wire and
snake_case in Python.
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from app.core.validators import clean_form_value


class RequestModel(BaseModel):
    """Base for JSON request bodies."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class FormModel(RequestModel):
    """Base for multipart form bodies.

    Surrounding quotes are stripped from every string value, and empty
    strings are treated as absent.
    """

    @model_validator(mode="before")
    @classmethod
    def clean_values(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned = {}
        for key, value in data.items():
            value = clean_form_value(value)
            if value == "":
                continue
            cleaned[key] = value
        return cleaned


class ResponseModel(BaseModel):
    """Base for serialized ORM records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RecordOut(ResponseModel):
    """Fields shared by every stored record."""

    id: uuid.UUID
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ChannelRef(ResponseModel):
    """Channel summary embedded in other records."""

    id: uuid.UUID
    name: str


__all__ = [
    "ChannelRef",
    "FormModel",
    "RecordOut",
    "RequestModel",
    "ResponseModel",
]
