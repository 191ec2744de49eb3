"""Broadcaster service."""

import uuid

from app.core.exceptions import InputValidationError
from app.core.types import LocalFile
from app.models.broadcaster import Broadcaster
from app.schemas.broadcaster import BroadcasterCreate, BroadcasterUpdate
from app.services.content.base import ContentService

FOLDER = "seagulls/broadcasters"
IMAGE_TRANSFORMATION = {"width": 500, "crop": "scale"}


class BroadcasterService(ContentService[Broadcaster]):
    """Presenter profiles with a portrait image."""

    model = Broadcaster

    async def create(self, data: BroadcasterCreate, image: LocalFile | None) -> Broadcaster:
        """Create a broadcaster.

        Raises:
            InputValidationError: If the image is missing or the channel is unknown
            MediaUploadError: If the image upload fails
        """
        if image is None:
            raise InputValidationError("Image is required", field="image")

        async with self.db_session_factory() as session:
            await self._ensure_channel(session, data.channel_id)
            asset = await self._upload(image, "image", FOLDER, transformation=IMAGE_TRANSFORMATION)
            broadcaster = Broadcaster(
                channel_id=data.channel_id,
                name=data.name,
                image=asset.as_media(),
                social_links=data.social_links.model_dump(exclude_none=True),
                description=data.description,
            )
            return await self._persist(session, broadcaster)

    async def update(
        self,
        broadcaster_id: uuid.UUID,
        data: BroadcasterUpdate,
        image: LocalFile | None = None,
    ) -> Broadcaster:
        """Partially update a broadcaster, replacing the image if one is sent."""
        async with self.db_session_factory() as session:
            broadcaster = await self._load(session, broadcaster_id)
            changes = data.model_dump(exclude_unset=True, exclude_none=True)
            if data.channel_id is not None:
                await self._ensure_channel(session, data.channel_id)
            if data.social_links is not None:
                changes["social_links"] = data.social_links.model_dump(exclude_none=True)
            if image is not None:
                asset = await self._replace_media(
                    broadcaster.image, image, "image", FOLDER, transformation=IMAGE_TRANSFORMATION
                )
                changes["image"] = asset.as_media()
            self._apply(broadcaster, changes)
            return await self._persist(session, broadcaster)


__all__ = ["BroadcasterService"]
