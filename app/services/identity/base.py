"""Shared account plumbing for identity services.

Users, admins and superadmins live in one table, so e-mail and phone number
uniqueness holds across every role.
"""

import uuid
from typing import Any

import httpx
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Config
from app.core.exceptions import RecordAlreadyExistsError, RecordNotFoundError
from app.core.logging import get_logger
from app.core.types import SessionFactory
from app.models.principal import Principal, Role

logger = get_logger(__name__)

IN_USE = "Email or phone number is already in use by another account"
EMAIL_IN_USE = "Email is already in use by another account"
PHONE_IN_USE = "Phone number is already in use by another account"


def avatar_url(base_url: str, name: str) -> dict[str, Any]:
    """Generated avatar used until a principal uploads an image."""
    url = httpx.URL(base_url, params={"name": name, "background": "random"})
    return {"public_id": None, "url": str(url)}


class AccountService:
    """Base for services that read and write principals."""

    def __init__(self, db_session_factory: SessionFactory, config: Config) -> None:
        """Initialize account service.

        Args:
            db_session_factory: Database session factory
            config: Application settings
        """
        self.db_session_factory = db_session_factory
        self.config = config

    @staticmethod
    async def _find_by_email(session: AsyncSession, email: str) -> Principal | None:
        stmt = select(Principal).where(Principal.email == email.lower())
        return (await session.execute(stmt)).scalar_one_or_none()

    @staticmethod
    async def _get_principal(
        session: AsyncSession,
        principal_id: uuid.UUID,
        *roles: Role,
        message: str = "User not found",
    ) -> Principal:
        principal = await session.get(Principal, principal_id, populate_existing=True)
        if principal is None or (roles and not principal.has_role(*roles)):
            raise RecordNotFoundError("Principal", principal_id, message=message)
        return principal

    @staticmethod
    async def _ensure_unique(
        session: AsyncSession,
        email: str,
        phone_number: str,
    ) -> None:
        """Reject an e-mail or phone number already held by any principal.

        Raises:
            RecordAlreadyExistsError: 400 when either value is taken
        """
        stmt = select(Principal.id).where(
            or_(Principal.email == email, Principal.phone_number == phone_number)
        )
        existing = (await session.execute(stmt)).first()
        if existing is not None:
            raise RecordAlreadyExistsError(
                "Principal", "email", email, message=IN_USE, http_status=400
            )

    @staticmethod
    async def _ensure_available(
        session: AsyncSession,
        principal_id: uuid.UUID,
        email: str | None = None,
        phone_number: str | None = None,
    ) -> None:
        """Check profile changes against every other principal.

        Raises:
            RecordAlreadyExistsError: 400 naming the field that is taken
        """
        if email is not None:
            stmt = select(Principal.id).where(
                Principal.email == email, Principal.id != principal_id
            )
            if (await session.execute(stmt)).first() is not None:
                raise RecordAlreadyExistsError(
                    "Principal", "email", email, message=EMAIL_IN_USE, http_status=400
                )
        if phone_number is not None:
            stmt = select(Principal.id).where(
                Principal.phone_number == phone_number, Principal.id != principal_id
            )
            if (await session.execute(stmt)).first() is not None:
                raise RecordAlreadyExistsError(
                    "Principal",
                    "phoneNumber",
                    phone_number,
                    message=PHONE_IN_USE,
                    http_status=400,
                )


__all__ = [
    "AccountService",
    "EMAIL_IN_USE",
    "IN_USE",
    "PHONE_IN_USE",
    "avatar_url",
]
