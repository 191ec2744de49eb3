"""Advertisement ORM model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, ChannelScopedMixin, TimestampMixin, UUIDMixin


class Advertisement(Base, UUIDMixin, TimestampMixin, ChannelScopedMixin):
    """Advertising enquiry submitted from the public site.

    Attributes:
        name: Contact name (max 100 chars)
        email: Contact e-mail (max 100 chars)
        phone_number: E.164 phone number
        message: Enquiry text (max 500 chars)
    """

    __tablename__ = "advertisements"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(20), nullable=False)
    message: Mapped[str] = mapped_column(String(500), nullable=False)

    def __repr__(self) -> str:
        return f"<Advertisement(id={self.id}, name={self.name})>"


__all__ = ["Advertisement"]
