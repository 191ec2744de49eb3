"""Track submission and review workflow.

Listeners submit one track per quota week (Friday 00:00 to Friday 00:00,
server local time). Staff may set any review status and approve a track into
a broadcast slot, after which the listener is notified by e-mail.
Notification is best-effort: a failed e-mail never undoes an approval.
"""

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import (
    InputValidationError,
    MediaUploadError,
    PermissionDeniedError,
    QuotaExceededError,
    RecordNotFoundError,
)
from app.core.logging import get_logger
from app.core.types import BestEffortResult, LocalFile, SessionFactory
from app.core.week import get_week_end, get_week_start, local_now, slot_start
from app.infrastructure.mailer import Mailer
from app.infrastructure.media import MediaClient
from app.models.channel import Channel
from app.models.principal import Principal
from app.models.upload_track import ApprovedTrack, TrackStatus, UploadTrack
from app.schemas.track import TrackApproval, TrackFilters, TrackSubmission
from app.services.content.base import INVALID_CHANNEL, media_error
from app.services.notifications import EmailTemplateManager

logger = get_logger(__name__)

WEEKLY_LIMIT = 1
QUOTA_MESSAGE = (
    "You have reached your weekly upload limit. You can upload 1 track per week. "
    "Limit resets on Friday."
)
TRACK_NOT_FOUND = "Track not found"
ALREADY_APPROVED = "Track is already approved"
DATE_IN_PAST = "Date must be in the future"
FOLDER = "seagulls/tracks"


@dataclass
class ApprovalResult:
    """Outcome of approving a track.

    Attributes:
        track: The approved track
        approved_track: The broadcast slot created
        notification: Result of the best-effort e-mail
    """

    track: UploadTrack
    approved_track: ApprovedTrack
    notification: BestEffortResult


class TrackWorkflow:
    """Submission, review and scheduling of listener tracks.

    Example:
        >>> workflow = TrackWorkflow(session_factory, media, mailer, templates)
        >>> track = await workflow.submit(user, submission, staged_file)
        >>> result = await workflow.approve(track.id, admin, TrackApproval(date=..., time="14:30"))
    """

    def __init__(
        self,
        db_session_factory: SessionFactory,
        media: MediaClient,
        mailer: Mailer,
        templates: EmailTemplateManager,
    ) -> None:
        """Initialize track workflow.

        Args:
            db_session_factory: Database session factory
            media: Hosted media client for song files
            mailer: Mailer for approval notifications
            templates: E-mail template manager
        """
        self.db_session_factory = db_session_factory
        self.media = media
        self.mailer = mailer
        self.templates = templates

    # ============================================
    # Loading
    # ============================================

    @staticmethod
    def _track_options() -> list[Any]:
        return [
            selectinload(UploadTrack.channel),
            selectinload(UploadTrack.user),
            selectinload(UploadTrack.admin),
            selectinload(UploadTrack.approval),
        ]

    async def _load(self, session: AsyncSession, track_id: uuid.UUID) -> UploadTrack:
        stmt = (
            select(UploadTrack)
            .options(*self._track_options())
            .where(UploadTrack.id == track_id)
            .execution_options(populate_existing=True)
        )
        track = (await session.execute(stmt)).scalar_one_or_none()
        if track is None:
            raise RecordNotFoundError("UploadTrack", track_id, message=TRACK_NOT_FOUND)
        return track

    @staticmethod
    def _ensure_visible(track: UploadTrack, principal: Principal, action: str) -> None:
        if not principal.is_staff and track.user_id != principal.id:
            raise PermissionDeniedError(f"Not authorized to {action} this track")

    # ============================================
    # Submission
    # ============================================

    async def count_in_week(
        self,
        session: AsyncSession,
        user_id: uuid.UUID,
        week_start: datetime,
        week_end: datetime,
    ) -> int:
        stmt = select(func.count(UploadTrack.id)).where(
            UploadTrack.user_id == user_id,
            UploadTrack.created_at >= week_start,
            UploadTrack.created_at < week_end,
        )
        return int((await session.execute(stmt)).scalar_one())

    async def submit(
        self,
        user: Principal,
        data: TrackSubmission,
        song_file: LocalFile | None,
        now: datetime | None = None,
    ) -> UploadTrack:
        """Accept a listener's track for review.

        Args:
            user: Submitting listener
            data: Validated form fields
            song_file: Staged audio or video file
            now: Reference time (defaults to the current local time)

        Returns:
            The stored track, status Pending

        Raises:
            QuotaExceededError: If the user already submitted this week
            InputValidationError: Missing file or unknown channel
            MediaUploadError: If the media host rejects the file
        """
        now = now or local_now()
        week_start = get_week_start(now)
        week_end = get_week_end(now)

        async with self.db_session_factory() as session:
            used = await self.count_in_week(session, user.id, week_start, week_end)
            if used >= WEEKLY_LIMIT:
                logger.info("Weekly track quota reached", user_id=str(user.id), used=used)
                raise QuotaExceededError(QUOTA_MESSAGE, reset_date=week_end)

            if song_file is None:
                raise InputValidationError("Song file is required", field="songFile")

            if await session.get(Channel, data.channel_id) is None:
                raise InputValidationError(INVALID_CHANNEL, field="channelId")

            kind = "audio" if song_file.is_audio else "video"
            try:
                asset = await self.media.upload(
                    song_file.path,
                    folder=f"{FOLDER}/{kind}",
                    resource_type=kind,
                    filename=song_file.filename,
                )
            except MediaUploadError as e:
                logger.error("Song upload failed", user_id=str(user.id), error=e.message)
                raise media_error("Error uploading song file", e) from e

            track = UploadTrack(
                channel_id=data.channel_id,
                user_id=user.id,
                song_name=data.song_name,
                song_file=asset.as_media(),
                genre=[genre.value for genre in data.genre],
                status=TrackStatus.PENDING.value,
                week_start=week_start,
            )
            session.add(track)
            try:
                await session.commit()
            except IntegrityError as e:
                # A concurrent submission won the (user, week) slot
                await session.rollback()
                await self.media.destroy_quietly(asset.public_id, kind)
                raise QuotaExceededError(QUOTA_MESSAGE, reset_date=week_end) from e

            logger.info(
                "Track submitted",
                track_id=str(track.id),
                user_id=str(user.id),
                channel_id=str(data.channel_id),
                resource_type=kind,
            )
            return await self._load(session, track.id)

    # ============================================
    # Queries
    # ============================================

    async def list_tracks(self, filters: TrackFilters | None = None) -> list[UploadTrack]:
        """Staff view of all submissions, newest first."""
        filters = filters or TrackFilters()
        async with self.db_session_factory() as session:
            stmt = select(UploadTrack).options(*self._track_options())
            if filters.status is not None:
                stmt = stmt.where(UploadTrack.status == filters.status.value)
            if filters.channel_id is not None:
                stmt = stmt.where(UploadTrack.channel_id == filters.channel_id)
            if filters.user_id is not None:
                stmt = stmt.where(UploadTrack.user_id == filters.user_id)
            result = await session.execute(stmt.order_by(UploadTrack.created_at.desc()))
            return list(result.scalars().all())

    async def my_tracks(self, user: Principal) -> list[UploadTrack]:
        async with self.db_session_factory() as session:
            stmt = (
                select(UploadTrack)
                .options(*self._track_options())
                .where(UploadTrack.user_id == user.id)
                .order_by(UploadTrack.created_at.desc())
            )
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def get(self, track_id: uuid.UUID, principal: Principal) -> UploadTrack:
        """Fetch one track for its owner or for staff.

        Raises:
            RecordNotFoundError: If the track does not exist
            PermissionDeniedError: If the caller is neither owner nor staff
        """
        async with self.db_session_factory() as session:
            track = await self._load(session, track_id)
            self._ensure_visible(track, principal, "view")
            return track

    async def approved_list(
        self,
        channel_id: uuid.UUID | None = None,
        on_date: date | None = None,
    ) -> list[ApprovedTrack]:
        """Public broadcast schedule, ordered by date then time."""
        async with self.db_session_factory() as session:
            stmt = select(ApprovedTrack).options(
                selectinload(ApprovedTrack.channel),
                selectinload(ApprovedTrack.track).selectinload(UploadTrack.user),
            )
            if channel_id is not None:
                stmt = stmt.where(ApprovedTrack.channel_id == channel_id)
            if on_date is not None:
                stmt = stmt.where(ApprovedTrack.date == on_date)
            result = await session.execute(stmt.order_by(ApprovedTrack.date, ApprovedTrack.time))
            return list(result.scalars().all())

    # ============================================
    # Review
    # ============================================

    async def update_status(
        self,
        track_id: uuid.UUID,
        status: TrackStatus,
        admin: Principal,
    ) -> UploadTrack:
        """Set a track's review status.

        Any status may follow any other; the broadcast slot of a previously
        approved track is left in place.

        Raises:
            RecordNotFoundError: If the track does not exist
        """
        async with self.db_session_factory() as session:
            track = await self._load(session, track_id)
            track.status = status.value
            track.admin_id = admin.id
            await session.commit()
            logger.info(
                "Track status updated",
                track_id=str(track_id),
                status=status.value,
                admin_id=str(admin.id),
            )
            return await self._load(session, track_id)

    async def approve(
        self,
        track_id: uuid.UUID,
        admin: Principal,
        slot: TrackApproval,
        now: datetime | None = None,
    ) -> ApprovalResult:
        """Approve a track into a broadcast slot and notify its submitter.

        The slot's date and time are read in server local time and must be
        strictly in the future. Pending, Checked and Declined tracks can all
        be approved; a slot left over from an earlier approval is moved.

        Raises:
            InputValidationError: Past slot or track already approved
            RecordNotFoundError: If the track does not exist
        """
        now = now or local_now()
        if slot_start(slot.date, slot.time) <= now:
            raise InputValidationError(DATE_IN_PAST, field="date")

        async with self.db_session_factory() as session:
            track = await self._load(session, track_id)
            if track.status == TrackStatus.APPROVED.value:
                raise InputValidationError(ALREADY_APPROVED, field="status")

            track.status = TrackStatus.APPROVED.value
            track.admin_id = admin.id
            approved = track.approval
            if approved is None:
                approved = ApprovedTrack(
                    channel_id=track.channel_id,
                    track_id=track.id,
                    date=slot.date,
                    time=slot.time,
                )
                session.add(approved)
            else:
                approved.date = slot.date
                approved.time = slot.time
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise InputValidationError(ALREADY_APPROVED, field="status") from e

            track = await self._load(session, track_id)
            logger.info(
                "Track approved",
                track_id=str(track_id),
                admin_id=str(admin.id),
                date=slot.date.isoformat(),
                time=slot.time,
            )

        message = self.templates.track_approved(
            to=track.user.email,
            user_name=track.user.name,
            song_name=track.song_name,
            channel_name=track.channel.name,
            broadcast_date=slot.date,
            time=slot.time,
        )
        notification = await self.mailer.send_quietly(message)
        if not notification.ok:
            logger.warning(
                "Approval e-mail not delivered",
                track_id=str(track_id),
                error=notification.error,
            )
        return ApprovalResult(track=track, approved_track=approved, notification=notification)

    # ============================================
    # Deletion
    # ============================================

    async def delete(self, track_id: uuid.UUID, principal: Principal) -> BestEffortResult:
        """Delete a track and its broadcast slot.

        The song file is destroyed on the media host best-effort.

        Returns:
            Result of the remote destroy

        Raises:
            RecordNotFoundError: If the track does not exist
            PermissionDeniedError: If the caller is neither owner nor staff
        """
        async with self.db_session_factory() as session:
            track = await self._load(session, track_id)
            self._ensure_visible(track, principal, "delete")

            destroyed = BestEffortResult.success()
            song = track.song_file or {}
            if song.get("public_id"):
                destroyed = await self.media.destroy_quietly(
                    song["public_id"], song.get("resource_type") or "video"
                )

            await session.delete(track)
            await session.commit()
            logger.info(
                "Track deleted",
                track_id=str(track_id),
                by=str(principal.id),
                media_destroyed=destroyed.ok,
            )
            return destroyed


__all__ = [
    "ALREADY_APPROVED",
    "ApprovalResult",
    "DATE_IN_PAST",
    "QUOTA_MESSAGE",
    "TRACK_NOT_FOUND",
    "TrackWorkflow",
]
