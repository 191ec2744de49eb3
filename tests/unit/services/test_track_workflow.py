"""Tests for the track submission and review workflow."""

import uuid
from datetime import UTC, date, datetime
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import (
    InputValidationError,
    MediaUploadError,
    PermissionDeniedError,
    QuotaExceededError,
    RecordNotFoundError,
)
from app.core.types import BestEffortResult, LocalFile
from app.models.principal import Role
from app.models.upload_track import ApprovedTrack, TrackStatus, UploadTrack
from app.schemas.track import TrackApproval, TrackSubmission
from app.services.notifications import EmailTemplateManager
from app.services.tracks import TrackWorkflow
from app.services.tracks.workflow import (
    ALREADY_APPROVED,
    DATE_IN_PAST,
    QUOTA_MESSAGE,
)

# Saturday; the quota week started Friday 2026-10-16
NOW = datetime(2026, 10, 17, 12, 0, tzinfo=UTC)


@pytest.fixture
def mock_mailer():
    mailer = MagicMock()
    mailer.send_quietly = AsyncMock(return_value=BestEffortResult.success())
    return mailer


@pytest.fixture
def workflow(mock_db_session_factory, mock_media, mock_mailer):
    factory, _ = mock_db_session_factory
    return TrackWorkflow(
        db_session_factory=factory,
        media=mock_media,
        mailer=mock_mailer,
        templates=EmailTemplateManager(),
    )


@pytest.fixture
def listener(make_principal):
    return make_principal(Role.USER, name="Rami", email="rami@example.com")


@pytest.fixture
def admin(make_principal):
    return make_principal(Role.ADMIN)


@pytest.fixture
def staged(tmp_path):
    def build(content_type: str = "audio/mpeg", name: str = "song.mp3") -> LocalFile:
        path = Path(tmp_path) / name
        path.write_bytes(b"\x00" * 16)
        return LocalFile(path=path, filename=name, content_type=content_type, size=16)

    return build


@pytest.fixture
def make_track(channel, listener):
    def build(status: TrackStatus = TrackStatus.PENDING, **overrides) -> UploadTrack:
        fields = {
            "id": uuid.uuid4(),
            "channel_id": channel.id,
            "channel": channel,
            "user_id": listener.id,
            "user": listener,
            "song_name": "Sea Breeze",
            "song_file": {
                "public_id": "seagulls/tracks/audio/sea",
                "url": "https://cdn.test/sea.mp3",
                "resource_type": "audio",
            },
            "genre": ["Pop"],
            "status": status.value,
            "week_start": datetime(2026, 10, 16, tzinfo=UTC),
            "created_at": NOW,
            "updated_at": NOW,
        }
        fields.update(overrides)
        return UploadTrack(**fields)

    return build


def submission(channel_id: uuid.UUID) -> TrackSubmission:
    return TrackSubmission.model_validate(
        {"channelId": str(channel_id), "songName": "Sea Breeze", "genre": '["Pop", "Hip Hop"]'}
    )


def count_then_reload(session, scalar_result, used: int = 0):
    """First execute is the weekly count, later ones reload the added track."""

    def execute(*args, **kwargs):
        if session.add.called:
            return scalar_result(session.add.call_args.args[0])
        return scalar_result(used)

    session.execute.side_effect = execute


@pytest.mark.unit
class TestSubmit:
    @pytest.mark.asyncio
    async def test_submit_audio(
        self, workflow, mock_db_session_factory, mock_media, channel, listener, staged,
        scalar_result,
    ):
        _, session = mock_db_session_factory
        session.get.return_value = channel
        count_then_reload(session, scalar_result)

        track = await workflow.submit(listener, submission(channel.id), staged(), now=NOW)

        assert track.status == TrackStatus.PENDING.value
        assert track.genre == ["Pop", "Hip Hop"]
        assert track.week_start == datetime(2026, 10, 16, tzinfo=UTC)
        kwargs = mock_media.upload.call_args.kwargs
        assert kwargs["folder"] == "seagulls/tracks/audio"
        assert kwargs["resource_type"] == "audio"

    @pytest.mark.asyncio
    async def test_submit_video(
        self, workflow, mock_db_session_factory, mock_media, channel, listener, staged,
        scalar_result,
    ):
        _, session = mock_db_session_factory
        session.get.return_value = channel
        count_then_reload(session, scalar_result)

        await workflow.submit(
            listener, submission(channel.id), staged("video/mp4", "clip.mp4"), now=NOW
        )

        kwargs = mock_media.upload.call_args.kwargs
        assert kwargs["folder"] == "seagulls/tracks/video"
        assert kwargs["resource_type"] == "video"

    @pytest.mark.asyncio
    async def test_weekly_quota(
        self, workflow, mock_db_session_factory, mock_media, channel, listener, staged,
        scalar_result,
    ):
        _, session = mock_db_session_factory
        count_then_reload(session, scalar_result, used=1)

        with pytest.raises(QuotaExceededError) as exc_info:
            await workflow.submit(listener, submission(channel.id), staged(), now=NOW)

        assert exc_info.value.message == QUOTA_MESSAGE
        assert exc_info.value.http_status == 429
        assert exc_info.value.reset_date == datetime(2026, 10, 23, tzinfo=UTC)
        mock_media.upload.assert_not_called()

    @pytest.mark.asyncio
    async def test_quota_checked_before_file(
        self, workflow, mock_db_session_factory, channel, listener, scalar_result
    ):
        _, session = mock_db_session_factory
        count_then_reload(session, scalar_result, used=1)

        with pytest.raises(QuotaExceededError):
            await workflow.submit(listener, submission(channel.id), None, now=NOW)

    @pytest.mark.asyncio
    async def test_file_required(
        self, workflow, mock_db_session_factory, channel, listener, scalar_result
    ):
        _, session = mock_db_session_factory
        count_then_reload(session, scalar_result)

        with pytest.raises(InputValidationError, match="Song file is required"):
            await workflow.submit(listener, submission(channel.id), None, now=NOW)

    @pytest.mark.asyncio
    async def test_unknown_channel(
        self, workflow, mock_db_session_factory, mock_media, listener, staged, scalar_result
    ):
        _, session = mock_db_session_factory
        session.get.return_value = None
        count_then_reload(session, scalar_result)

        with pytest.raises(InputValidationError, match="Invalid channelId"):
            await workflow.submit(listener, submission(uuid.uuid4()), staged(), now=NOW)

        mock_media.upload.assert_not_called()

    @pytest.mark.asyncio
    async def test_upload_failure(
        self, workflow, mock_db_session_factory, mock_media, channel, listener, staged,
        scalar_result,
    ):
        _, session = mock_db_session_factory
        session.get.return_value = channel
        count_then_reload(session, scalar_result)
        mock_media.upload.side_effect = MediaUploadError("File size too large")

        with pytest.raises(MediaUploadError, match="Error uploading song file"):
            await workflow.submit(listener, submission(channel.id), staged(), now=NOW)

        session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrent_submission_loses(
        self, workflow, mock_db_session_factory, mock_media, channel, listener, staged,
        scalar_result,
    ):
        _, session = mock_db_session_factory
        session.get.return_value = channel
        count_then_reload(session, scalar_result)
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))

        with pytest.raises(QuotaExceededError):
            await workflow.submit(listener, submission(channel.id), staged(), now=NOW)

        session.rollback.assert_awaited_once()
        mock_media.destroy_quietly.assert_awaited_once_with("seagulls/x/abc", "audio")


@pytest.mark.unit
class TestReview:
    @pytest.mark.asyncio
    async def test_update_status(
        self, workflow, mock_db_session_factory, admin, make_track, scalar_result
    ):
        _, session = mock_db_session_factory
        track = make_track()
        session.execute.return_value = scalar_result(track)

        updated = await workflow.update_status(track.id, TrackStatus.CHECKED, admin)

        assert updated.status == TrackStatus.CHECKED.value
        assert updated.admin_id == admin.id
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("start", "target"),
        [
            (TrackStatus.CHECKED, TrackStatus.PENDING),
            (TrackStatus.DECLINED, TrackStatus.CHECKED),
            (TrackStatus.APPROVED, TrackStatus.DECLINED),
            (TrackStatus.DECLINED, TrackStatus.APPROVED),
        ],
    )
    async def test_any_status_can_follow_any_other(
        self, workflow, mock_db_session_factory, admin, make_track, scalar_result, start, target
    ):
        _, session = mock_db_session_factory
        track = make_track(start)
        session.execute.return_value = scalar_result(track)

        updated = await workflow.update_status(track.id, target, admin)

        assert updated.status == target.value
        session.commit.assert_awaited_once()


@pytest.mark.unit
class TestApprove:
    @pytest.mark.asyncio
    async def test_approve_schedules_and_notifies(
        self, workflow, mock_db_session_factory, mock_mailer, admin, make_track, scalar_result
    ):
        _, session = mock_db_session_factory
        track = make_track(TrackStatus.CHECKED)
        session.execute.return_value = scalar_result(track)

        slot = TrackApproval(date=date(2026, 10, 19), time="9:30")
        result = await workflow.approve(track.id, admin, slot, now=NOW)

        assert result.track.status == TrackStatus.APPROVED.value
        assert isinstance(result.approved_track, ApprovedTrack)
        assert result.approved_track.time == "09:30"
        assert result.approved_track.channel_id == track.channel_id
        assert result.notification.ok

        message = mock_mailer.send_quietly.call_args.args[0]
        assert message.to == "rami@example.com"
        assert "Sea Breeze" in message.subject
        assert "Monday, October 19, 2026" in message.html

    @pytest.mark.asyncio
    async def test_mail_failure_keeps_approval(
        self, workflow, mock_db_session_factory, mock_mailer, admin, make_track, scalar_result
    ):
        _, session = mock_db_session_factory
        track = make_track()
        session.execute.return_value = scalar_result(track)
        mock_mailer.send_quietly.return_value = BestEffortResult.failure("SMTP down")

        slot = TrackApproval(date=date(2026, 10, 19), time="14:30")
        result = await workflow.approve(track.id, admin, slot, now=NOW)

        assert not result.notification.ok
        assert result.track.status == TrackStatus.APPROVED.value
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_slot_in_past(self, workflow, mock_db_session_factory, admin):
        factory, _ = mock_db_session_factory
        slot = TrackApproval(date=date(2026, 10, 16), time="11:59")

        with pytest.raises(InputValidationError, match=DATE_IN_PAST):
            await workflow.approve(uuid.uuid4(), admin, slot, now=NOW)

        factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_already_approved(
        self, workflow, mock_db_session_factory, admin, make_track, scalar_result
    ):
        _, session = mock_db_session_factory
        track = make_track(TrackStatus.APPROVED)
        session.execute.return_value = scalar_result(track)

        slot = TrackApproval(date=date(2026, 10, 19), time="14:30")
        with pytest.raises(InputValidationError, match=ALREADY_APPROVED):
            await workflow.approve(track.id, admin, slot, now=NOW)

    @pytest.mark.asyncio
    async def test_declined_track_can_be_approved(
        self, workflow, mock_db_session_factory, mock_mailer, admin, make_track, scalar_result
    ):
        _, session = mock_db_session_factory
        track = make_track(TrackStatus.DECLINED)
        session.execute.return_value = scalar_result(track)

        slot = TrackApproval(date=date(2026, 10, 19), time="14:30")
        result = await workflow.approve(track.id, admin, slot, now=NOW)

        assert result.track.status == TrackStatus.APPROVED.value
        session.add.assert_called_once_with(result.approved_track)
        mock_mailer.send_quietly.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_reapproval_moves_existing_slot(
        self, workflow, mock_db_session_factory, admin, make_track, scalar_result
    ):
        _, session = mock_db_session_factory
        old_slot = ApprovedTrack(date=date(2026, 10, 18), time="08:00")
        track = make_track(TrackStatus.DECLINED, approval=old_slot)
        session.execute.return_value = scalar_result(track)

        slot = TrackApproval(date=date(2026, 10, 20), time="21:15")
        result = await workflow.approve(track.id, admin, slot, now=NOW)

        assert result.approved_track is old_slot
        assert old_slot.date == date(2026, 10, 20)
        assert old_slot.time == "21:15"
        session.add.assert_not_called()


@pytest.mark.unit
class TestVisibility:
    @pytest.mark.asyncio
    async def test_owner_can_view(
        self, workflow, mock_db_session_factory, listener, make_track, scalar_result
    ):
        _, session = mock_db_session_factory
        track = make_track()
        session.execute.return_value = scalar_result(track)

        assert await workflow.get(track.id, listener) is track

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(
        self, workflow, mock_db_session_factory, mock_media, make_principal, make_track,
        scalar_result,
    ):
        _, session = mock_db_session_factory
        track = make_track()
        session.execute.return_value = scalar_result(track)
        stranger = make_principal(Role.USER)

        with pytest.raises(PermissionDeniedError, match="Not authorized to delete this track"):
            await workflow.delete(track.id, stranger)

        mock_media.destroy_quietly.assert_not_called()
        session.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_staff_delete_destroys_song(
        self, workflow, mock_db_session_factory, mock_media, admin, make_track, scalar_result
    ):
        _, session = mock_db_session_factory
        track = make_track()
        session.execute.return_value = scalar_result(track)

        result = await workflow.delete(track.id, admin)

        assert result.ok
        mock_media.destroy_quietly.assert_awaited_once_with("seagulls/tracks/audio/sea", "audio")
        session.delete.assert_awaited_once_with(track)

    @pytest.mark.asyncio
    async def test_missing_track(self, workflow, mock_db_session_factory, admin, scalar_result):
        _, session = mock_db_session_factory
        session.execute.return_value = scalar_result(None)

        with pytest.raises(RecordNotFoundError, match="Track not found"):
            await workflow.get(uuid.uuid4(), admin)
