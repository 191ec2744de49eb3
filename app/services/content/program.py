"""Program service."""

import uuid

from app.core.exceptions import InputValidationError
from app.core.types import LocalFile
from app.core.validators import time_to_minutes
from app.models.program import Program
from app.schemas.program import END_BEFORE_START, ProgramCreate, ProgramUpdate
from app.services.content.base import ContentService

FOLDER = "seagulls/programs"
IMAGE_TRANSFORMATION = {"width": 800, "crop": "scale"}


class ProgramService(ContentService[Program]):
    """Weekly show slots."""

    model = Program

    async def create(self, data: ProgramCreate, image: LocalFile | None) -> Program:
        """Create a program.

        Raises:
            InputValidationError: If the image is missing or the channel is unknown
            MediaUploadError: If the image upload fails
        """
        if image is None:
            raise InputValidationError("Image is required", field="image")

        async with self.db_session_factory() as session:
            await self._ensure_channel(session, data.channel_id)
            asset = await self._upload(image, "image", FOLDER, transformation=IMAGE_TRANSFORMATION)
            program = Program(
                channel_id=data.channel_id,
                title=data.title,
                image=asset.as_media(),
                description=data.description,
                day=data.day.value,
                start_time=data.start_time,
                end_time=data.end_time,
                status=data.status.value,
            )
            return await self._persist(session, program)

    async def update(
        self,
        program_id: uuid.UUID,
        data: ProgramUpdate,
        image: LocalFile | None = None,
    ) -> Program:
        """Partially update a program.

        The start/end ordering is checked against the stored value when only
        one of the two times is supplied.
        """
        async with self.db_session_factory() as session:
            program = await self._load(session, program_id)
            changes = data.model_dump(exclude_unset=True, exclude_none=True, mode="json")
            changes.pop("channel_id", None)

            start = data.start_time or program.start_time
            end = data.end_time or program.end_time
            if (data.start_time or data.end_time) and time_to_minutes(end) <= time_to_minutes(start):
                raise InputValidationError(END_BEFORE_START, field="endTime")

            if data.channel_id is not None:
                await self._ensure_channel(session, data.channel_id)
                changes["channel_id"] = data.channel_id
            if image is not None:
                asset = await self._replace_media(
                    program.image, image, "image", FOLDER, transformation=IMAGE_TRANSFORMATION
                )
                changes["image"] = asset.as_media()
            self._apply(program, changes)
            return await self._persist(session, program)


__all__ = ["ProgramService"]
