"""Principal ORM model.

Users, admins and superadmins share one table, discriminated by ``role``.
E-mail and phone number are therefore unique across all three roles at the
database level.
"""

import enum
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, MediaMixin, TimestampMixin, UUIDMixin


class Role(str, enum.Enum):
    """Authorization tier."""

    USER = "user"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


STAFF_ROLES: frozenset[Role] = frozenset({Role.ADMIN, Role.SUPERADMIN})


class Principal(Base, UUIDMixin, TimestampMixin, MediaMixin):
    """Authenticated actor.

    Attributes:
        role: user, admin or superadmin
        name: Display name (2-50 chars)
        email: Lower-cased login e-mail, unique
        phone_number: E.164 phone number, unique
        password_hash: bcrypt hash
        image: Avatar media reference ({public_id, url})
        is_active: Deactivated accounts cannot log in
        otp: Pending password-reset passcode
        otp_expires_at: Passcode expiry
        otp_verified: Passcode verified, one reset allowed
        last_login: Last successful login
    """

    __tablename__ = "principals"

    media_fields = ("image",)

    role: Mapped[Role] = mapped_column(String(20), nullable=False, default=Role.USER)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    phone_number: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    image: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    is_active: Mapped[bool] = mapped_column(nullable=False, default=True)

    # Password reset
    otp: Mapped[str | None] = mapped_column(String(10))
    otp_expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    otp_verified: Mapped[bool] = mapped_column(nullable=False, default=False)

    last_login: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    __table_args__ = (Index("idx_principal_role", "role"),)

    @property
    def is_staff(self) -> bool:
        """True for admins and superadmins."""
        return self.role in STAFF_ROLES

    def has_role(self, *roles: Role | str) -> bool:
        """Check the principal against a set of allowed roles."""
        return Role(self.role) in {Role(r) for r in roles}

    def clear_otp(self) -> None:
        """Forget any pending passcode."""
        self.otp = None
        self.otp_expires_at = None
        self.otp_verified = False

    def __repr__(self) -> str:
        return f"<Principal(id={self.id}, role={self.role}, email={self.email})>"


__all__ = [
    "Principal",
    "Role",
    "STAFF_ROLES",
]
