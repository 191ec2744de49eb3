"""Interview and interview applicant services."""

import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import InputValidationError
from app.core.logging import get_logger
from app.core.types import LocalFile
from app.models.interview import Interview, InterviewApplicant
from app.models.program import Program
from app.schemas.interview import (
    ApplicantCreate,
    ApplicantStatusUpdate,
    InterviewCreate,
    InterviewUpdate,
)
from app.services.content.base import ContentService

logger = get_logger(__name__)

FOLDER = "seagulls/interviews"


class InterviewService(ContentService[Interview]):
    """Recorded interview videos attached to a program."""

    model = Interview

    def load_options(self) -> list[Any]:
        return [selectinload(Interview.channel), selectinload(Interview.program)]

    async def _ensure_program(
        self,
        session: AsyncSession,
        program_id: uuid.UUID,
        channel_id: uuid.UUID,
    ) -> Program:
        program = await session.get(Program, program_id)
        if program is None:
            raise InputValidationError(
                "Invalid programId. Program does not exist.", field="programId"
            )
        if program.channel_id != channel_id:
            raise InputValidationError(
                "Program does not belong to the specified channel", field="programId"
            )
        return program

    async def create(self, data: InterviewCreate, content: LocalFile | None) -> Interview:
        """Create an interview.

        Raises:
            InputValidationError: If the video is missing, the channel or
                program is unknown, or the program belongs to another channel
            MediaUploadError: If the video upload fails
        """
        if content is None:
            raise InputValidationError("Video content is required", field="content")

        async with self.db_session_factory() as session:
            await self._ensure_channel(session, data.channel_id)
            await self._ensure_program(session, data.program_id, data.channel_id)
            asset = await self._upload(content, "video", FOLDER, resource_type="video")
            interview = Interview(
                channel_id=data.channel_id,
                program_id=data.program_id,
                title=data.title,
                date=data.date,
                content=asset.as_media(),
                description=data.description,
            )
            return await self._persist(session, interview)

    async def update(
        self,
        interview_id: uuid.UUID,
        data: InterviewUpdate,
        content: LocalFile | None = None,
    ) -> Interview:
        """Partially update an interview, replacing the video if one is sent."""
        async with self.db_session_factory() as session:
            interview = await self._load(session, interview_id)
            changes = data.model_dump(exclude_unset=True, exclude_none=True)

            channel_id = data.channel_id or interview.channel_id
            if data.channel_id is not None:
                await self._ensure_channel(session, data.channel_id)
            if data.program_id is not None or data.channel_id is not None:
                await self._ensure_program(
                    session, data.program_id or interview.program_id, channel_id
                )

            if content is not None:
                asset = await self._replace_media(
                    interview.content, content, "video", FOLDER, resource_type="video"
                )
                changes["content"] = asset.as_media()
            self._apply(interview, changes)
            return await self._persist(session, interview)


class ApplicantService(ContentService[InterviewApplicant]):
    """Public applications to be interviewed."""

    model = InterviewApplicant
    not_found_message = "Interview applicant not found"
    channel_missing_status = 404

    async def create(self, data: ApplicantCreate) -> InterviewApplicant:
        """Record an application.

        Raises:
            RecordNotFoundError: If the channel is unknown
        """
        async with self.db_session_factory() as session:
            await self._ensure_channel(session, data.channel_id)
            applicant = InterviewApplicant(
                channel_id=data.channel_id,
                name=data.name,
                email=data.email,
                phone_number=data.phone_number,
                topic=data.topic,
                job=data.job,
                social_links=data.social_links.model_dump(exclude_none=True),
            )
            applicant = await self._persist(session, applicant)
            logger.info("Interview application received", applicant_id=str(applicant.id))
            return applicant

    async def update_status(
        self,
        applicant_id: uuid.UUID,
        data: ApplicantStatusUpdate,
    ) -> InterviewApplicant:
        async with self.db_session_factory() as session:
            applicant = await self._load(session, applicant_id)
            applicant.status = data.status.value
            return await self._persist(session, applicant)


__all__ = ["ApplicantService", "InterviewService"]
