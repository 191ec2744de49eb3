"""Interview ORM models.

This module defines recorded interviews attached to a program, and the
public applications from people who want to be interviewed.
"""

import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, ChannelScopedMixin, MediaMixin, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from app.models.program import Program


class ApplicantStatus(str, enum.Enum):
    """Review status of an interview application."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Interview(Base, UUIDMixin, TimestampMixin, ChannelScopedMixin, MediaMixin):
    """Recorded interview video.

    Attributes:
        program_id: Program the interview aired on (same channel)
        title: Interview title
        date: Air date
        content: Video media reference ({public_id, url, resource_type})
        description: Summary
    """

    __tablename__ = "interviews"

    media_fields = ("content",)

    program_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("programs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    content: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    program: Mapped["Program"] = relationship("Program")

    def __repr__(self) -> str:
        return f"<Interview(id={self.id}, title={self.title})>"


class InterviewApplicant(Base, UUIDMixin, TimestampMixin, ChannelScopedMixin):
    """Public application to appear in an interview.

    Attributes:
        name: Applicant name (2-50 chars)
        email: Contact e-mail
        phone_number: E.164 phone number
        topic: Proposed topic (5-100 chars)
        job: Occupation (2-100 chars)
        social_links: {"ig", "fb", "twitter"} profile links, each optional
        status: pending, approved or rejected
    """

    __tablename__ = "interview_applicants"

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(20), nullable=False)
    topic: Mapped[str] = mapped_column(String(100), nullable=False)
    job: Mapped[str] = mapped_column(String(100), nullable=False)
    social_links: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    status: Mapped[ApplicantStatus] = mapped_column(
        String(10), nullable=False, default=ApplicantStatus.PENDING
    )

    def __repr__(self) -> str:
        return f"<InterviewApplicant(id={self.id}, name={self.name}, status={self.status})>"


__all__ = [
    "ApplicantStatus",
    "Interview",
    "InterviewApplicant",
]
