"""Track submission ORM models.

This module defines UploadTrack, a listener's audio or video submission, and
ApprovedTrack, the broadcast slot created when an admin approves one.
"""

import enum
import uuid
from datetime import date as date_type
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    JSON,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, ChannelScopedMixin, MediaMixin, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from app.models.principal import Principal


class TrackStatus(str, enum.Enum):
    """Review status of a submitted track."""

    PENDING = "Pending"  # Waiting for review
    CHECKED = "Checked"  # Listened to, not yet decided
    APPROVED = "Approved"  # Scheduled for broadcast
    DECLINED = "Declined"  # Rejected


class Genre(str, enum.Enum):
    """Accepted genre vocabulary."""

    POP = "Pop"
    ROCK = "Rock"
    HIP_HOP = "Hip Hop"
    RAP = "Rap"
    RNB = "R&B"
    COUNTRY = "Country"
    JAZZ = "Jazz"
    CLASSICAL = "Classical"
    ELECTRONIC = "Electronic"
    DANCE = "Dance"
    REGGAE = "Reggae"
    BLUES = "Blues"
    FOLK = "Folk"
    METAL = "Metal"
    PUNK = "Punk"
    ALTERNATIVE = "Alternative"
    INDIE = "Indie"
    LATIN = "Latin"
    WORLD = "World"
    GOSPEL = "Gospel"
    SOUL = "Soul"
    FUNK = "Funk"
    DISCO = "Disco"
    HOUSE = "House"
    TECHNO = "Techno"
    TRANCE = "Trance"
    DUBSTEP = "Dubstep"
    AMBIENT = "Ambient"
    OTHER = "Other"


class UploadTrack(Base, UUIDMixin, TimestampMixin, ChannelScopedMixin, MediaMixin):
    """Listener track submission.

    Attributes:
        user_id: Submitting user
        song_name: Song title
        song_file: Media reference ({public_id, url, resource_type})
        genre: One or more Genre values
        status: Review status
        admin_id: Admin who last changed the status
        week_start: Quota week the submission counts against
        approval: Broadcast slot once approved (1:1)
    """

    __tablename__ = "upload_tracks"

    media_fields = ("song_file",)

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("principals.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    song_name: Mapped[str] = mapped_column(String(200), nullable=False)
    song_file: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    genre: Mapped[list[str]] = mapped_column(ARRAY(String(30)), nullable=False)

    status: Mapped[TrackStatus] = mapped_column(
        String(20), nullable=False, default=TrackStatus.PENDING
    )
    admin_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("principals.id", ondelete="SET NULL"),
    )

    week_start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Relationships
    user: Mapped["Principal"] = relationship("Principal", foreign_keys=[user_id])
    admin: Mapped["Principal"] = relationship("Principal", foreign_keys=[admin_id])
    approval: Mapped["ApprovedTrack"] = relationship(
        "ApprovedTrack",
        back_populates="track",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "week_start", name="uq_upload_tracks_user_week"),
        Index("idx_upload_track_status", "status"),
        Index("idx_upload_track_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<UploadTrack(id={self.id}, song_name={self.song_name}, "
            f"user_id={self.user_id}, status={self.status})>"
        )


class ApprovedTrack(Base, UUIDMixin, TimestampMixin, ChannelScopedMixin):
    """Broadcast slot for an approved track.

    Attributes:
        track_id: Approved submission (unique, at most one slot per track)
        date: Broadcast date
        time: Broadcast time as zero-padded HH:MM
    """

    __tablename__ = "approved_tracks"

    track_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("upload_tracks.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    time: Mapped[str] = mapped_column(String(5), nullable=False)

    track: Mapped["UploadTrack"] = relationship("UploadTrack", back_populates="approval")

    __table_args__ = (Index("idx_approved_track_slot", "date", "time"),)

    def __repr__(self) -> str:
        return (
            f"<ApprovedTrack(id={self.id}, track_id={self.track_id}, "
            f"date={self.date}, time={self.time})>"
        )


__all__ = [
    "ApprovedTrack",
    "Genre",
    "TrackStatus",
    "UploadTrack",
]
