"""Broadcaster ORM model."""

from typing import Any

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, ChannelScopedMixin, MediaMixin, TimestampMixin, UUIDMixin


class Broadcaster(Base, UUIDMixin, TimestampMixin, ChannelScopedMixin, MediaMixin):
    """On-air presenter of a channel.

    Attributes:
        name: Presenter name (max 50 chars)
        image: Portrait media reference
        social_links: {"ig", "FB", "YT"} profile links, each optional
        description: Biography (max 1000 chars)
    """

    __tablename__ = "broadcasters"

    media_fields = ("image",)

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    image: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    social_links: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Broadcaster(id={self.id}, name={self.name})>"


__all__ = ["Broadcaster"]
