"""Base model mixins and utilities.

This module provides reusable mixins for common model patterns:
- UUIDMixin: UUID primary key
- TimestampMixin: created_at and updated_at fields
- ChannelScopedMixin: owning channel foreign key and relationship
- MediaMixin: declares which JSON columns hold hosted media references
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any, ClassVar

from sqlalchemy import DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, declared_attr, mapped_column, relationship

from app.core.database import Base

if TYPE_CHECKING:
    from app.models.channel import Channel


class UUIDMixin:
    """Mixin for UUID primary key.

    Example:
        >>> class News(Base, UUIDMixin, TimestampMixin):
        ...     __tablename__ = "news"
        ...     title: Mapped[str]
    """

    @declared_attr
    @classmethod
    def id(cls) -> Mapped[uuid.UUID]:
        """UUID primary key."""
        return mapped_column(
            primary_key=True,
            default=uuid.uuid4,
            index=True,
        )


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps."""

    @declared_attr
    @classmethod
    def created_at(cls) -> Mapped[datetime]:
        """Timestamp when record was created."""
        return mapped_column(
            DateTime(timezone=True),
            nullable=False,
            server_default=func.now(),
        )

    @declared_attr
    @classmethod
    def updated_at(cls) -> Mapped[datetime]:
        """Timestamp when record was last updated."""
        return mapped_column(
            DateTime(timezone=True),
            nullable=False,
            server_default=func.now(),
            onupdate=func.now(),
        )


class ChannelScopedMixin:
    """Mixin for records owned by exactly one channel.

    Deleting the channel deletes the record through the foreign key cascade.
    """

    @declared_attr
    @classmethod
    def channel_id(cls) -> Mapped[uuid.UUID]:
        """Owning channel."""
        return mapped_column(
            ForeignKey("channels.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )

    @declared_attr
    @classmethod
    def channel(cls) -> Mapped["Channel"]:
        """Owning channel (load explicitly with selectinload)."""
        return relationship("Channel")


class MediaMixin:
    """Mixin for records that reference hosted media.

    Media columns are JSON objects of the form
    ``{"public_id": ..., "url": ..., "resource_type": ...}``.
    """

    media_fields: ClassVar[tuple[str, ...]] = ()

    def media_refs(self) -> list[tuple[str, str]]:
        """List ``(public_id, resource_type)`` for every attached media object."""
        refs: list[tuple[str, str]] = []
        for name in self.media_fields:
            media: dict[str, Any] | None = getattr(self, name, None)
            if media and media.get("public_id"):
                refs.append((media["public_id"], media.get("resource_type") or "image"))
        return refs


__all__ = [
    "Base",
    "ChannelScopedMixin",
    "MediaMixin",
    "TimestampMixin",
    "UUIDMixin",
]
