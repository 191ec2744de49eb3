"""Channel registry service.

Channels own every content record. Deleting a channel removes its dependents
through foreign-key cascades, after destroying their remote media.
"""

import uuid

from sqlalchemy import select

from app.core.exceptions import RecordNotFoundError
from app.core.logging import get_logger
from app.core.types import SessionFactory
from app.infrastructure.media import MediaClient
from app.models.broadcaster import Broadcaster
from app.models.channel import Channel
from app.models.event import Event
from app.models.interview import Interview
from app.models.news import News
from app.models.program import Program
from app.models.static_info import StaticInfo
from app.models.upload_track import UploadTrack
from app.schemas.channel import ChannelIn

logger = get_logger(__name__)

# Channel-owned models that carry hosted media
MEDIA_DEPENDENTS = (Broadcaster, Program, Interview, News, Event, StaticInfo, UploadTrack)


class ChannelService:
    """Create, read, rename and delete channels.

    Example:
        >>> service = ChannelService(db_session_factory=session_factory, media=media)
        >>> channel = await service.create(ChannelIn(name="Seagulls Beirut"))
    """

    def __init__(self, db_session_factory: SessionFactory, media: MediaClient) -> None:
        """Initialize channel service.

        Args:
            db_session_factory: Database session factory
            media: Hosted media client used for cascade cleanup
        """
        self.db_session_factory = db_session_factory
        self.media = media

    async def create(self, data: ChannelIn) -> Channel:
        async with self.db_session_factory() as session:
            channel = Channel(name=data.name)
            session.add(channel)
            await session.commit()
            await session.refresh(channel)
            logger.info("Channel created", channel_id=str(channel.id), name=channel.name)
            return channel

    async def list_channels(self) -> list[Channel]:
        async with self.db_session_factory() as session:
            result = await session.execute(select(Channel).order_by(Channel.created_at))
            return list(result.scalars().all())

    async def get(self, channel_id: uuid.UUID) -> Channel:
        """Fetch a channel.

        Raises:
            RecordNotFoundError: If the channel does not exist
        """
        async with self.db_session_factory() as session:
            channel = await session.get(Channel, channel_id)
            if channel is None:
                raise RecordNotFoundError("Channel", channel_id)
            return channel

    async def update(self, channel_id: uuid.UUID, data: ChannelIn) -> Channel:
        async with self.db_session_factory() as session:
            channel = await session.get(Channel, channel_id)
            if channel is None:
                raise RecordNotFoundError("Channel", channel_id)
            channel.name = data.name
            await session.commit()
            await session.refresh(channel)
            return channel

    async def delete(self, channel_id: uuid.UUID) -> int:
        """Delete a channel and everything it owns.

        Remote media of the dependents is destroyed first, best-effort.

        Returns:
            Number of remote media objects that could not be destroyed
        """
        async with self.db_session_factory() as session:
            channel = await session.get(Channel, channel_id)
            if channel is None:
                raise RecordNotFoundError("Channel", channel_id)

            refs: list[tuple[str, str]] = []
            for model in MEDIA_DEPENDENTS:
                result = await session.execute(select(model).where(model.channel_id == channel_id))
                for record in result.scalars():
                    refs.extend(record.media_refs())

            outcomes = await self.media.destroy_all(refs)
            failures = sum(1 for outcome in outcomes if not outcome.ok)

            await session.delete(channel)
            await session.commit()
            logger.info(
                "Channel deleted",
                channel_id=str(channel_id),
                media_destroyed=len(refs) - failures,
                media_failures=failures,
            )
            return failures


__all__ = ["ChannelService", "MEDIA_DEPENDENTS"]
