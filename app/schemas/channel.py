"""Channel request and response models."""

from pydantic import Field

from app.schemas.base import RecordOut, RequestModel


class ChannelIn(RequestModel):
    """Channel create/update body."""

    name: str = Field(min_length=1, max_length=100)


class ChannelOut(RecordOut):
    name: str


__all__ = ["ChannelIn", "ChannelOut"]
