"""News ORM model."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, ChannelScopedMixin, MediaMixin, TimestampMixin, UUIDMixin


class News(Base, UUIDMixin, TimestampMixin, ChannelScopedMixin, MediaMixin):
    """News article.

    Attributes:
        title: Headline (max 150 chars)
        image: Header image media reference
        description: Teaser (20-300 chars)
        content: Article body (min 50 chars)
        published_at: Publication time
    """

    __tablename__ = "news"

    media_fields = ("image",)

    title: Mapped[str] = mapped_column(String(150), nullable=False)
    image: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    description: Mapped[str] = mapped_column(String(300), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    published_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<News(id={self.id}, title={self.title})>"


__all__ = ["News"]
