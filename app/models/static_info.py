"""StaticInfo ORM model.

Per-channel website settings. At most one row exists per channel, enforced by
a unique constraint on ``channel_id``.
"""

import uuid
from typing import Any

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, ChannelScopedMixin, MediaMixin, TimestampMixin, UUIDMixin

FAVICON_SIZES: tuple[int, ...] = (16, 32, 48, 64, 128, 256)


class StaticInfo(Base, UUIDMixin, TimestampMixin, ChannelScopedMixin, MediaMixin):
    """Channel website settings.

    Attributes:
        about_us: About page text
        frequency: Broadcast frequency label
        frequency_image: Frequency artwork media reference
        social_media_links: Free-form map of network name to URL
        download_app: {"AppStore", "GooglePlay"} store links
        meta_tags: HTML meta keywords
        meta_description: HTML meta description
        fav_icon: Favicon media reference with width and height
        phone_number: Contact phone
        email: Contact e-mail
        address: Postal address
    """

    __tablename__ = "static_infos"

    media_fields = ("frequency_image", "fav_icon")

    channel_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("channels.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    about_us: Mapped[str] = mapped_column(Text, nullable=False)
    frequency: Mapped[str] = mapped_column(String(50), nullable=False)
    frequency_image: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    social_media_links: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    download_app: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    meta_tags: Mapped[str] = mapped_column(Text, nullable=False)
    meta_description: Mapped[str] = mapped_column(Text, nullable=False)
    fav_icon: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    phone_number: Mapped[str] = mapped_column(String(30), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(300), nullable=False)

    def __repr__(self) -> str:
        return f"<StaticInfo(id={self.id}, channel_id={self.channel_id})>"


__all__ = [
    "FAVICON_SIZES",
    "StaticInfo",
]
