"""Event ORM model."""

import enum
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, ChannelScopedMixin, MediaMixin, TimestampMixin, UUIDMixin


class EventType(str, enum.Enum):
    """Kind of event listing."""

    EVENT = "event"
    PARTNERSHIP = "partnership"


class Event(Base, UUIDMixin, TimestampMixin, ChannelScopedMixin, MediaMixin):
    """Station event or partnership.

    Attributes:
        type: event or partnership
        title: Title (max 200 chars)
        description: Details (max 1000 chars)
        start_date: Start
        end_date: End
        address: Venue (max 300 chars)
        image: Poster media reference
    """

    __tablename__ = "events"

    media_fields = ("image",)

    type: Mapped[EventType] = mapped_column(String(20), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(String(1000), nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    address: Mapped[str] = mapped_column(String(300), nullable=False)
    image: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    __table_args__ = (Index("idx_event_start", "start_date"),)

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, type={self.type}, title={self.title})>"


__all__ = [
    "Event",
    "EventType",
]
