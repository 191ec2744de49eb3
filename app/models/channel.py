"""Channel ORM model.

A channel is one radio station of the network and the root tenant of every
other content record.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, UUIDMixin


class Channel(Base, UUIDMixin, TimestampMixin):
    """Radio channel.

    Attributes:
        name: Channel display name (max 100 chars)
    """

    __tablename__ = "channels"

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Channel(id={self.id}, name={self.name})>"


__all__ = ["Channel"]
