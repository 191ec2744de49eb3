"""Shared plumbing for channel-owned content services.

Every content entity follows the same lifecycle: validate, check the owning
channel, upload media, persist, and reload the record with the relationships
the API serializes. Deleting a record destroys its remote media first, on a
best-effort basis.
"""

import uuid
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import InputValidationError, MediaUploadError, RecordNotFoundError
from app.core.logging import get_logger
from app.core.types import LocalFile, SessionFactory
from app.infrastructure.media import MediaAsset, MediaClient
from app.models.base import Base
from app.models.channel import Channel

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

INVALID_CHANNEL = "Invalid channelId. Channel does not exist."


def media_error(message: str, cause: MediaUploadError) -> MediaUploadError:
    """Re-label an upload failure for the client, keeping the host's reason."""
    error = MediaUploadError(message, endpoint=cause.endpoint, status_code=cause.status_code)
    error.details = {"error": cause.message}
    return error


class ContentService(Generic[ModelT]):
    """CRUD base for records owned by a channel.

    Subclasses set ``model`` and may override ``load_options`` and
    ``ordering``. Create and update stay in the subclasses because each
    entity validates differently.

    Attributes:
        model: ORM class managed by the service
        not_found_message: Message for missing records
        channel_missing_status: 400 or 404 when the owning channel is unknown
    """

    model: ClassVar[type[Any]]
    not_found_message: ClassVar[str | None] = None
    channel_missing_status: ClassVar[int] = 400

    def __init__(
        self,
        db_session_factory: SessionFactory,
        media: MediaClient | None = None,
    ) -> None:
        """Initialize content service.

        Args:
            db_session_factory: Database session factory
            media: Hosted media client (required for entities with media)
        """
        self.db_session_factory = db_session_factory
        self.media = media

    # ============================================
    # Queries
    # ============================================

    def load_options(self) -> list[Any]:
        """Relationship loaders applied to every query."""
        return [selectinload(self.model.channel)]

    def ordering(self) -> list[Any]:
        return [self.model.created_at.desc()]

    async def list_records(self, channel_id: uuid.UUID | None = None) -> list[ModelT]:
        """List records, newest first, optionally for one channel."""
        async with self.db_session_factory() as session:
            stmt = select(self.model).options(*self.load_options()).order_by(*self.ordering())
            if channel_id is not None:
                stmt = stmt.where(self.model.channel_id == channel_id)
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def get(self, record_id: uuid.UUID) -> ModelT:
        """Fetch one record.

        Raises:
            RecordNotFoundError: If no record has this ID
        """
        async with self.db_session_factory() as session:
            return await self._load(session, record_id)

    async def _load(self, session: AsyncSession, record_id: uuid.UUID) -> ModelT:
        stmt = (
            select(self.model)
            .options(*self.load_options())
            .where(self.model.id == record_id)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        record = result.scalar_one_or_none()
        if record is None:
            raise RecordNotFoundError(
                self.model.__name__, record_id, message=self.not_found_message
            )
        return record

    # ============================================
    # Writes
    # ============================================

    async def _ensure_channel(self, session: AsyncSession, channel_id: uuid.UUID) -> Channel:
        channel = await session.get(Channel, channel_id)
        if channel is None:
            if self.channel_missing_status == 404:
                raise RecordNotFoundError("Channel", channel_id)
            raise InputValidationError(INVALID_CHANNEL, field="channelId")
        return channel

    async def _persist(self, session: AsyncSession, record: ModelT) -> ModelT:
        """Commit a new or modified record and reload it for serialization."""
        session.add(record)
        await session.commit()
        return await self._load(session, record.id)

    async def delete(self, record_id: uuid.UUID) -> ModelT:
        """Delete a record after best-effort destruction of its media.

        Raises:
            RecordNotFoundError: If no record has this ID
        """
        async with self.db_session_factory() as session:
            record = await self._load(session, record_id)
            await self._destroy_media(record)
            await session.delete(record)
            await session.commit()
            logger.info(f"{self.model.__name__} deleted", record_id=str(record_id))
            return record

    # ============================================
    # Media
    # ============================================

    def _media_client(self) -> MediaClient:
        if self.media is None:
            raise RuntimeError(f"{type(self).__name__} was created without a media client")
        return self.media

    async def _upload(
        self,
        file: LocalFile,
        label: str,
        folder: str,
        resource_type: str = "image",
        transformation: dict[str, Any] | None = None,
    ) -> MediaAsset:
        """Forward a staged file to the media host.

        Raises:
            MediaUploadError: Labelled "Error uploading <label>"
        """
        try:
            return await self._media_client().upload(
                file.path,
                folder=folder,
                resource_type=resource_type,
                transformation=transformation,
                filename=file.filename,
            )
        except MediaUploadError as e:
            logger.error(
                "Media upload failed",
                model=self.model.__name__,
                folder=folder,
                error=e.message,
            )
            raise media_error(f"Error uploading {label}", e) from e

    async def _destroy_media(self, record: Any) -> None:
        refs = record.media_refs() if hasattr(record, "media_refs") else []
        if refs:
            await self._media_client().destroy_all(refs)

    async def _replace_media(
        self,
        current: dict[str, Any] | None,
        file: LocalFile,
        label: str,
        folder: str,
        resource_type: str = "image",
        transformation: dict[str, Any] | None = None,
    ) -> MediaAsset:
        """Destroy the current media object, then upload the replacement."""
        if current and current.get("public_id"):
            await self._media_client().destroy_quietly(
                current["public_id"], current.get("resource_type") or resource_type
            )
        return await self._upload(file, label, folder, resource_type, transformation)

    @staticmethod
    def _apply(record: Any, changes: dict[str, Any]) -> None:
        for field, value in changes.items():
            setattr(record, field, value)


__all__ = [
    "ContentService",
    "INVALID_CHANNEL",
    "media_error",
]
