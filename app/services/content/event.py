"""Event service."""

import uuid

from app.core.exceptions import InputValidationError
from app.core.types import LocalFile
from app.core.week import as_local
from app.models.event import Event
from app.schemas.event import END_BEFORE_START, EventCreate, EventUpdate
from app.services.content.base import ContentService

FOLDER = "seagulls/events"


class EventService(ContentService[Event]):
    """Station events and partnerships."""

    model = Event
    channel_missing_status = 404

    async def create(self, data: EventCreate, image: LocalFile | None) -> Event:
        """Create an event.

        Raises:
            InputValidationError: If the image is missing
            RecordNotFoundError: If the channel is unknown
            MediaUploadError: If the image upload fails
        """
        if image is None:
            raise InputValidationError("Event image is required", field="image")

        async with self.db_session_factory() as session:
            await self._ensure_channel(session, data.channel_id)
            asset = await self._upload(image, "image", FOLDER)
            event = Event(
                channel_id=data.channel_id,
                type=data.type.value,
                title=data.title,
                description=data.description,
                start_date=data.start_date,
                end_date=data.end_date,
                address=data.address,
                image=asset.as_media(),
            )
            return await self._persist(session, event)

    async def update(
        self,
        event_id: uuid.UUID,
        data: EventUpdate,
        image: LocalFile | None = None,
    ) -> Event:
        async with self.db_session_factory() as session:
            event = await self._load(session, event_id)
            changes = data.model_dump(exclude_unset=True, exclude_none=True, mode="python")
            if data.type is not None:
                changes["type"] = data.type.value

            start = data.start_date or event.start_date
            end = data.end_date or event.end_date
            if as_local(end) < as_local(start):
                raise InputValidationError(END_BEFORE_START, field="endDate")

            if data.channel_id is not None:
                await self._ensure_channel(session, data.channel_id)
            if image is not None:
                asset = await self._replace_media(event.image, image, "image", FOLDER)
                changes["image"] = asset.as_media()
            self._apply(event, changes)
            return await self._persist(session, event)


__all__ = ["EventService"]
