"""Listener accounts.

Registration, profile management and staff moderation of user accounts.
Avatar uploads are best-effort: a failed upload keeps the current image.
"""

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.core.config import Config
from app.core.exceptions import InputValidationError, MediaUploadError, RecordAlreadyExistsError
from app.core.logging import get_logger
from app.core.security import hash_password, verify_password
from app.core.types import LocalFile, SessionFactory
from app.infrastructure.media import MediaClient
from app.models.principal import Principal, Role
from app.schemas.identity import ChangePasswordRequest, ProfileUpdateForm, RegisterForm
from app.services.identity.base import IN_USE, AccountService, avatar_url

logger = get_logger(__name__)

FOLDER = "seagulls/users"
TRANSFORMATION = {"width": 300, "crop": "scale"}


class UserService(AccountService):
    """Listener account operations."""

    def __init__(
        self,
        db_session_factory: SessionFactory,
        config: Config,
        media: MediaClient,
    ) -> None:
        super().__init__(db_session_factory, config)
        self.media = media

    async def _upload_avatar(self, image: LocalFile, principal_id: Any) -> dict[str, Any] | None:
        try:
            asset = await self.media.upload(
                image.path,
                folder=FOLDER,
                transformation=TRANSFORMATION,
                filename=image.filename,
            )
        except MediaUploadError as e:
            logger.warning("Avatar upload failed", principal_id=str(principal_id), error=e.message)
            return None
        return {"public_id": asset.public_id, "url": asset.url}

    async def register(self, data: RegisterForm, image: LocalFile | None = None) -> Principal:
        """Create a listener account.

        Raises:
            RecordAlreadyExistsError: 400 when the e-mail or phone is taken
        """
        async with self.db_session_factory() as session:
            await self._ensure_unique(session, data.email, data.phone_number)

            user = Principal(
                role=Role.USER.value,
                name=data.name,
                email=data.email,
                phone_number=data.phone_number,
                password_hash=hash_password(data.password),
                image=avatar_url(self.config.default_avatar_url, data.name),
            )
            if image is not None:
                user.image = await self._upload_avatar(image, data.email) or user.image

            session.add(user)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise RecordAlreadyExistsError(
                    "Principal", "email", data.email, message=IN_USE, http_status=400
                ) from e
            await session.refresh(user)
            logger.info("User registered", user_id=str(user.id))
            return user

    async def get(self, user_id: uuid.UUID) -> Principal:
        async with self.db_session_factory() as session:
            return await self._get_principal(session, user_id, Role.USER)

    async def update_profile(
        self,
        user_id: uuid.UUID,
        data: ProfileUpdateForm,
        image: LocalFile | None = None,
    ) -> Principal:
        """Partially update name, e-mail, phone number and avatar.

        Raises:
            RecordNotFoundError: If the user does not exist
            RecordAlreadyExistsError: 400 naming the taken e-mail or phone
        """
        async with self.db_session_factory() as session:
            user = await self._get_principal(session, user_id, Role.USER)
            await self._ensure_available(session, user.id, data.email, data.phone_number)

            for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
                setattr(user, field, value)

            if image is not None:
                uploaded = await self._upload_avatar(image, user.id)
                if uploaded is not None:
                    previous = user.image or {}
                    if previous.get("public_id"):
                        await self.media.destroy_quietly(previous["public_id"])
                    user.image = uploaded

            await session.commit()
            await session.refresh(user)
            logger.info("Profile updated", user_id=str(user.id))
            return user

    async def change_password(self, user_id: uuid.UUID, data: ChangePasswordRequest) -> None:
        """Replace the password after checking the current one.

        Raises:
            InputValidationError: Wrong current password or unchanged password
        """
        async with self.db_session_factory() as session:
            user = await self._get_principal(session, user_id, Role.USER)
            if not verify_password(data.current_password, user.password_hash):
                raise InputValidationError("Current password is incorrect", field="currentPassword")
            if data.current_password == data.new_password:
                raise InputValidationError(
                    "New password must be different from current password", field="newPassword"
                )
            user.password_hash = hash_password(data.new_password)
            await session.commit()
            logger.info("Password changed", user_id=str(user.id))

    async def delete_image(self, user_id: uuid.UUID) -> Principal:
        """Remove the avatar, destroying the hosted copy best-effort."""
        async with self.db_session_factory() as session:
            user = await self._get_principal(session, user_id, Role.USER)
            current = user.image or {}
            if current.get("public_id"):
                await self.media.destroy_quietly(current["public_id"])
            user.image = {"public_id": None, "url": None}
            await session.commit()
            await session.refresh(user)
            return user

    # ============================================
    # Staff moderation
    # ============================================

    async def list_users(self) -> list[Principal]:
        async with self.db_session_factory() as session:
            stmt = (
                select(Principal)
                .where(Principal.role == Role.USER.value)
                .order_by(Principal.created_at.desc())
            )
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def toggle_active(self, user_id: uuid.UUID) -> Principal:
        async with self.db_session_factory() as session:
            user = await self._get_principal(session, user_id, Role.USER)
            user.is_active = not user.is_active
            await session.commit()
            logger.info("User active toggled", user_id=str(user.id), is_active=user.is_active)
            return user

    async def delete(self, user_id: uuid.UUID) -> None:
        async with self.db_session_factory() as session:
            user = await self._get_principal(session, user_id, Role.USER)
            current = user.image or {}
            if current.get("public_id"):
                await self.media.destroy_quietly(current["public_id"])
            await session.delete(user)
            await session.commit()
            logger.info("User deleted", user_id=str(user_id))


__all__ = ["UserService"]
