"""Competition ORM models.

This module defines on-air competitions and the answers users submit to them.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, ChannelScopedMixin, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from app.models.principal import Principal


class Competition(Base, UUIDMixin, TimestampMixin, ChannelScopedMixin):
    """Listener competition.

    Attributes:
        title: Title (max 100 chars)
        description: Rules and question
        start_date: Opening time, not in the past when set
        end_date: Closing time, after start_date
        submissions: User answers (1:N, deleted with the competition)
    """

    __tablename__ = "competitions"

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    submissions: Mapped[list["CompetitionSubmission"]] = relationship(
        "CompetitionSubmission",
        back_populates="competition",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CompetitionSubmission.created_at",
    )

    def __repr__(self) -> str:
        return f"<Competition(id={self.id}, title={self.title})>"


class CompetitionSubmission(Base, UUIDMixin, TimestampMixin):
    """A user's answer to a competition.

    Attributes:
        competition_id: Competition answered
        user_id: Submitting user
        answer: Answer text
    """

    __tablename__ = "competition_submissions"

    competition_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("competitions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("principals.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    answer: Mapped[str] = mapped_column(Text, nullable=False)

    competition: Mapped["Competition"] = relationship("Competition", back_populates="submissions")
    user: Mapped["Principal"] = relationship("Principal")

    def __repr__(self) -> str:
        return (
            f"<CompetitionSubmission(id={self.id}, competition_id={self.competition_id}, "
            f"user_id={self.user_id})>"
        )


__all__ = [
    "Competition",
    "CompetitionSubmission",
]
