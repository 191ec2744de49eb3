"""Program ORM model.

A program is a weekly show slot on a channel: one weekday with a start and
end time.
"""

import enum
from typing import Any

from sqlalchemy import JSON, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, ChannelScopedMixin, MediaMixin, TimestampMixin, UUIDMixin


class Weekday(str, enum.Enum):
    """Day a program airs."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


class ProgramStatus(str, enum.Enum):
    """Whether the program is currently on the schedule."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class Program(Base, UUIDMixin, TimestampMixin, ChannelScopedMixin, MediaMixin):
    """Weekly radio show.

    Attributes:
        title: Show title
        image: Cover media reference
        description: Short blurb (max 100 chars)
        day: Weekday the show airs
        start_time: HH:MM start
        end_time: HH:MM end, after start_time
        status: active or inactive
    """

    __tablename__ = "programs"

    media_fields = ("image",)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    image: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    description: Mapped[str] = mapped_column(String(100), nullable=False)
    day: Mapped[Weekday] = mapped_column(String(10), nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    status: Mapped[ProgramStatus] = mapped_column(
        String(10), nullable=False, default=ProgramStatus.ACTIVE
    )

    __table_args__ = (Index("idx_program_channel_day", "channel_id", "day"),)

    def __repr__(self) -> str:
        return f"<Program(id={self.id}, title={self.title}, day={self.day})>"


__all__ = [
    "Program",
    "ProgramStatus",
    "Weekday",
]
