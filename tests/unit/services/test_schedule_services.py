"""Tests for programs, interviews, applicants and competitions."""

import uuid
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from app.core.exceptions import InputValidationError, RecordNotFoundError
from app.core.types import LocalFile
from app.models.channel import Channel
from app.models.competition import Competition
from app.models.interview import ApplicantStatus, InterviewApplicant
from app.models.program import Program
from app.schemas.competition import CompetitionUpdate, SubmissionCreate
from app.schemas.interview import ApplicantCreate, ApplicantStatusUpdate, InterviewCreate
from app.schemas.program import END_BEFORE_START, ProgramUpdate
from app.services.content import (
    ApplicantService,
    CompetitionService,
    InterviewService,
    ProgramService,
)
from app.services.content.competition import START_IN_PAST, check_competition_dates

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=UTC)
STAMP = datetime(2026, 10, 1, tzinfo=UTC)


@pytest.fixture
def clip(tmp_path) -> LocalFile:
    path = tmp_path / "interview.mp4"
    path.write_bytes(b"mp4")
    return LocalFile(path=Path(path), filename="interview.mp4", content_type="video/mp4", size=3)


def stored_program(channel_id: uuid.UUID) -> Program:
    return Program(
        id=uuid.uuid4(),
        channel_id=channel_id,
        title="Morning Tide",
        image={"public_id": "seagulls/programs/tide", "url": "https://cdn.test/tide.png"},
        description="Wake-up show",
        day="Monday",
        start_time="10:00",
        end_time="11:00",
        status="active",
        created_at=STAMP,
        updated_at=STAMP,
    )


def session_get_by_model(session, records: dict) -> None:
    session.get.side_effect = lambda model, record_id: records.get(model)


@pytest.mark.unit
class TestProgramUpdate:
    @pytest.mark.asyncio
    async def test_single_time_checked_against_stored_value(
        self, mock_db_session_factory, mock_media, channel, scalar_result
    ):
        factory, session = mock_db_session_factory
        session.execute.return_value = scalar_result(stored_program(channel.id))
        service = ProgramService(db_session_factory=factory, media=mock_media)

        with pytest.raises(InputValidationError, match=END_BEFORE_START):
            await service.update(uuid.uuid4(), ProgramUpdate(start_time="12:00"))

        session.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_title_only(self, mock_db_session_factory, mock_media, channel, scalar_result):
        factory, session = mock_db_session_factory
        program = stored_program(channel.id)
        session.execute.return_value = scalar_result(program)
        service = ProgramService(db_session_factory=factory, media=mock_media)

        updated = await service.update(program.id, ProgramUpdate(title="Evening Tide"))

        assert updated.title == "Evening Tide"
        assert updated.start_time == "10:00"
        mock_media.destroy_quietly.assert_not_called()


@pytest.mark.unit
class TestInterviewCreate:
    @pytest.mark.asyncio
    async def test_video_required(self, mock_db_session_factory, mock_media, channel):
        factory, _ = mock_db_session_factory
        service = InterviewService(db_session_factory=factory, media=mock_media)
        data = InterviewCreate(
            channel_id=channel.id,
            program_id=uuid.uuid4(),
            title="Harbour voices",
            date=NOW,
            description="A talk with fishermen",
        )

        with pytest.raises(InputValidationError, match="Video content is required"):
            await service.create(data, None)

    @pytest.mark.asyncio
    async def test_program_from_other_channel(
        self, mock_db_session_factory, mock_media, channel, clip
    ):
        factory, session = mock_db_session_factory
        program = stored_program(uuid.uuid4())
        session_get_by_model(session, {Channel: channel, Program: program})
        service = InterviewService(db_session_factory=factory, media=mock_media)
        data = InterviewCreate(
            channel_id=channel.id,
            program_id=program.id,
            title="Harbour voices",
            date=NOW,
            description="A talk with fishermen",
        )

        with pytest.raises(
            InputValidationError, match="Program does not belong to the specified channel"
        ):
            await service.create(data, clip)

        mock_media.upload.assert_not_called()

    @pytest.mark.asyncio
    async def test_uploads_video(
        self, mock_db_session_factory, mock_media, channel, clip, scalar_result
    ):
        factory, session = mock_db_session_factory
        program = stored_program(channel.id)
        session_get_by_model(session, {Channel: channel, Program: program})
        session.execute.side_effect = lambda *args, **kwargs: scalar_result(
            session.add.call_args.args[0]
        )
        service = InterviewService(db_session_factory=factory, media=mock_media)
        data = InterviewCreate(
            channel_id=channel.id,
            program_id=program.id,
            title="Harbour voices",
            date=NOW,
            description="A talk with fishermen",
        )

        interview = await service.create(data, clip)

        assert interview.program_id == program.id
        assert interview.content["public_id"] == "seagulls/x/abc"
        kwargs = mock_media.upload.call_args.kwargs
        assert kwargs["folder"] == "seagulls/interviews"
        assert kwargs["resource_type"] == "video"


@pytest.mark.unit
class TestApplicants:
    @pytest.mark.asyncio
    async def test_unknown_channel_is_not_found(self, mock_db_session_factory):
        factory, _ = mock_db_session_factory
        service = ApplicantService(db_session_factory=factory)
        data = ApplicantCreate(
            channel_id=uuid.uuid4(),
            name="Salma",
            email="salma@example.com",
            phone_number="+201001234567",
            topic="Coastal ecology",
            job="Biologist",
        )

        with pytest.raises(RecordNotFoundError, match="Channel not found"):
            await service.create(data)

    @pytest.mark.asyncio
    async def test_update_status(self, mock_db_session_factory, channel, scalar_result):
        factory, session = mock_db_session_factory
        applicant = InterviewApplicant(
            id=uuid.uuid4(),
            channel_id=channel.id,
            name="Salma",
            email="salma@example.com",
            phone_number="+201001234567",
            topic="Coastal ecology",
            job="Biologist",
            social_links={},
            status=ApplicantStatus.PENDING.value,
            created_at=STAMP,
            updated_at=STAMP,
        )
        session.execute.return_value = scalar_result(applicant)
        service = ApplicantService(db_session_factory=factory)

        updated = await service.update_status(
            applicant.id, ApplicantStatusUpdate(status="Approved")
        )

        assert updated.status == "approved"
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_applicant(self, mock_db_session_factory, scalar_result):
        factory, session = mock_db_session_factory
        session.execute.return_value = scalar_result(None)
        service = ApplicantService(db_session_factory=factory)

        with pytest.raises(RecordNotFoundError, match="Interview applicant not found"):
            await service.get(uuid.uuid4())


@pytest.mark.unit
class TestCompetitionDates:
    def test_valid_window(self):
        check_competition_dates(NOW + timedelta(days=1), NOW + timedelta(days=8), now=NOW)

    def test_start_in_past(self):
        with pytest.raises(InputValidationError, match=START_IN_PAST):
            check_competition_dates(NOW - timedelta(days=3), NOW + timedelta(days=8), now=NOW)

    def test_end_not_after_start(self):
        start = NOW + timedelta(days=2)
        with pytest.raises(InputValidationError, match="End date must be after start date"):
            check_competition_dates(start, start, now=NOW)


@pytest.mark.unit
class TestCompetitionService:
    @pytest.mark.asyncio
    async def test_update_rejects_past_start(
        self, mock_db_session_factory, channel, scalar_result
    ):
        factory, session = mock_db_session_factory
        competition = Competition(
            id=uuid.uuid4(),
            channel_id=channel.id,
            title="Name that tune",
            description="Guess the song",
            start_date=datetime(2030, 1, 1, tzinfo=UTC),
            end_date=datetime(2030, 1, 8, tzinfo=UTC),
            created_at=STAMP,
            updated_at=STAMP,
        )
        session.execute.return_value = scalar_result(competition)
        service = CompetitionService(db_session_factory=factory)

        with pytest.raises(InputValidationError, match=START_IN_PAST):
            await service.update(
                competition.id, CompetitionUpdate(start_date=datetime(2020, 1, 1, tzinfo=UTC))
            )

    @pytest.mark.asyncio
    async def test_submission_to_missing_competition(
        self, mock_db_session_factory, make_principal
    ):
        factory, session = mock_db_session_factory
        service = CompetitionService(db_session_factory=factory)

        with pytest.raises(RecordNotFoundError, match="Competition not found"):
            await service.add_submission(
                uuid.uuid4(), make_principal(), SubmissionCreate(answer="Bohemian Rhapsody")
            )

        session.add.assert_not_called()
