"""Competition service.

Competitions open on or after today and close after they open. The date
rules are re-checked on every update against the stored values.
"""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.core.exceptions import InputValidationError, RecordNotFoundError
from app.core.logging import get_logger
from app.core.week import as_local, local_now
from app.models.competition import Competition, CompetitionSubmission
from app.models.principal import Principal
from app.schemas.competition import CompetitionCreate, CompetitionUpdate, SubmissionCreate
from app.services.content.base import ContentService

logger = get_logger(__name__)

START_IN_PAST = "Start date must be today or a future date"
END_BEFORE_START = "End date must be after start date"


def check_competition_dates(
    start_date: datetime,
    end_date: datetime,
    now: datetime | None = None,
) -> None:
    """Validate a competition window.

    Raises:
        InputValidationError: If the start is before today or the end is not
            after the start
    """
    today = (now or local_now()).date()
    if as_local(start_date).date() < today:
        raise InputValidationError(START_IN_PAST, field="startDate")
    if as_local(end_date) <= as_local(start_date):
        raise InputValidationError(END_BEFORE_START, field="endDate")


class CompetitionService(ContentService[Competition]):
    """Listener competitions and their submissions."""

    model = Competition
    channel_missing_status = 404

    def with_submissions(self) -> list[Any]:
        return [
            selectinload(Competition.channel),
            selectinload(Competition.submissions).selectinload(CompetitionSubmission.user),
        ]

    async def create(self, data: CompetitionCreate) -> Competition:
        """Create a competition.

        Raises:
            RecordNotFoundError: If the channel is unknown
            InputValidationError: If the date window is invalid
        """
        async with self.db_session_factory() as session:
            await self._ensure_channel(session, data.channel_id)
            check_competition_dates(data.start_date, data.end_date)
            competition = Competition(
                channel_id=data.channel_id,
                title=data.title,
                description=data.description,
                start_date=data.start_date,
                end_date=data.end_date,
            )
            return await self._persist(session, competition)

    async def list_with_submissions(self) -> list[Competition]:
        """Staff view: every competition with its submissions and their users."""
        async with self.db_session_factory() as session:
            stmt = (
                select(Competition)
                .options(*self.with_submissions())
                .order_by(Competition.created_at.desc())
            )
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def get_with_submissions(self, competition_id: uuid.UUID) -> Competition:
        async with self.db_session_factory() as session:
            stmt = (
                select(Competition)
                .options(*self.with_submissions())
                .where(Competition.id == competition_id)
            )
            result = await session.execute(stmt)
            competition = result.scalar_one_or_none()
            if competition is None:
                raise RecordNotFoundError("Competition", competition_id)
            return competition

    async def update(self, competition_id: uuid.UUID, data: CompetitionUpdate) -> Competition:
        """Partially update a competition, re-validating the date window."""
        async with self.db_session_factory() as session:
            competition = await self._load(session, competition_id)
            changes = data.model_dump(exclude_unset=True, exclude_none=True)

            if data.start_date is not None and as_local(data.start_date).date() < local_now().date():
                raise InputValidationError(START_IN_PAST, field="startDate")
            start = data.start_date or competition.start_date
            end = data.end_date or competition.end_date
            if (data.start_date or data.end_date) and as_local(end) <= as_local(start):
                raise InputValidationError(END_BEFORE_START, field="endDate")

            self._apply(competition, changes)
            return await self._persist(session, competition)

    async def add_submission(
        self,
        competition_id: uuid.UUID,
        user: Principal,
        data: SubmissionCreate,
    ) -> CompetitionSubmission:
        """Record a user's answer.

        Raises:
            RecordNotFoundError: If the competition does not exist
        """
        async with self.db_session_factory() as session:
            competition = await session.get(Competition, competition_id)
            if competition is None:
                raise RecordNotFoundError("Competition", competition_id)
            submission = CompetitionSubmission(
                competition_id=competition_id,
                user_id=user.id,
                answer=data.answer,
            )
            session.add(submission)
            await session.commit()
            stmt = (
                select(CompetitionSubmission)
                .options(selectinload(CompetitionSubmission.user))
                .where(CompetitionSubmission.id == submission.id)
                .execution_options(populate_existing=True)
            )
            submission = (await session.execute(stmt)).scalar_one()
            logger.info(
                "Competition submission added",
                competition_id=str(competition_id),
                user_id=str(user.id),
            )
            return submission


__all__ = [
    "CompetitionService",
    "END_BEFORE_START",
    "START_IN_PAST",
    "check_competition_dates",
]
