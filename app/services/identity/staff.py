"""Staff accounts.

Superadmins manage admin accounts. The first superadmin is seeded from the
command line.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import RecordAlreadyExistsError
from app.core.logging import get_logger
from app.core.security import hash_password
from app.models.principal import STAFF_ROLES, Principal, Role
from app.schemas.identity import AccountCreate
from app.services.identity.base import IN_USE, AccountService, avatar_url

logger = get_logger(__name__)


class StaffService(AccountService):
    """Admin and superadmin account management."""

    async def _create(self, data: AccountCreate, role: Role) -> Principal:
        async with self.db_session_factory() as session:
            await self._ensure_unique(session, data.email, data.phone_number)
            principal = Principal(
                role=role.value,
                name=data.name,
                email=data.email,
                phone_number=data.phone_number,
                password_hash=hash_password(data.password),
                image=avatar_url(self.config.default_avatar_url, data.name),
            )
            session.add(principal)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise RecordAlreadyExistsError(
                    "Principal", "email", data.email, message=IN_USE, http_status=400
                ) from e
            await session.refresh(principal)
            logger.info("Staff account created", principal_id=str(principal.id), role=role.value)
            return principal

    async def create_admin(self, data: AccountCreate) -> Principal:
        """Create an admin account.

        Raises:
            RecordAlreadyExistsError: 400 when the e-mail or phone is taken
        """
        return await self._create(data, Role.ADMIN)

    async def create_superadmin(self, data: AccountCreate) -> Principal:
        return await self._create(data, Role.SUPERADMIN)

    async def get(self, principal_id: uuid.UUID) -> Principal:
        async with self.db_session_factory() as session:
            return await self._get_principal(
                session, principal_id, *STAFF_ROLES, message="Admin not found"
            )

    async def list_admins(self) -> list[Principal]:
        async with self.db_session_factory() as session:
            stmt = (
                select(Principal)
                .where(Principal.role == Role.ADMIN.value)
                .order_by(Principal.created_at.desc())
            )
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def delete_admin(self, admin_id: uuid.UUID) -> None:
        """Delete an admin account. Superadmins cannot be deleted here.

        Raises:
            RecordNotFoundError: If no admin has this ID
        """
        async with self.db_session_factory() as session:
            admin = await self._get_principal(session, admin_id, Role.ADMIN, message="Admin not found")
            await session.delete(admin)
            await session.commit()
            logger.info("Admin deleted", admin_id=str(admin_id))


__all__ = ["StaffService"]
