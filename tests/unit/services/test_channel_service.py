"""Tests for ChannelService."""

import uuid
from unittest.mock import MagicMock

import pytest

from app.core.exceptions import RecordNotFoundError
from app.core.types import BestEffortResult
from app.models.broadcaster import Broadcaster
from app.models.news import News
from app.schemas.channel import ChannelIn
from app.services.content import ChannelService
from app.services.content.channel import MEDIA_DEPENDENTS


def rows(records):
    result = MagicMock()
    result.scalars.return_value = list(records)
    return result


@pytest.mark.unit
class TestChannelService:
    @pytest.mark.asyncio
    async def test_create(self, mock_db_session_factory, mock_media):
        factory, session = mock_db_session_factory
        service = ChannelService(db_session_factory=factory, media=mock_media)

        channel = await service.create(ChannelIn(name="Seagulls Beirut"))

        assert channel.name == "Seagulls Beirut"
        session.add.assert_called_once_with(channel)
        session.commit.assert_awaited_once()
        session.refresh.assert_awaited_once_with(channel)

    @pytest.mark.asyncio
    async def test_list(self, mock_db_session_factory, mock_media, channel, scalars_result):
        factory, session = mock_db_session_factory
        session.execute.return_value = scalars_result([channel])
        service = ChannelService(db_session_factory=factory, media=mock_media)

        assert await service.list_channels() == [channel]

    @pytest.mark.asyncio
    async def test_get_missing(self, mock_db_session_factory, mock_media):
        factory, session = mock_db_session_factory
        service = ChannelService(db_session_factory=factory, media=mock_media)

        with pytest.raises(RecordNotFoundError, match="Channel not found"):
            await service.get(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_rename(self, mock_db_session_factory, mock_media, channel):
        factory, session = mock_db_session_factory
        session.get.return_value = channel
        service = ChannelService(db_session_factory=factory, media=mock_media)

        updated = await service.update(channel.id, ChannelIn(name="Seagulls Amman"))

        assert updated.name == "Seagulls Amman"
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_destroys_dependent_media(self, mock_db_session_factory, mock_media, channel):
        factory, session = mock_db_session_factory
        session.get.return_value = channel
        broadcaster = Broadcaster(
            channel_id=channel.id,
            name="Mona",
            image={"public_id": "seagulls/broadcasters/mona", "url": "https://cdn.test/m.png"},
        )
        news = News(
            channel_id=channel.id,
            title="Harbour festival returns",
            image={"public_id": "seagulls/news/harbour", "url": "https://cdn.test/h.png"},
        )
        by_model = {Broadcaster: [broadcaster], News: [news]}
        session.execute.side_effect = [rows(by_model.get(model, [])) for model in MEDIA_DEPENDENTS]
        mock_media.destroy_all.return_value = [
            BestEffortResult.success(),
            BestEffortResult.failure("timeout"),
        ]
        service = ChannelService(db_session_factory=factory, media=mock_media)

        failures = await service.delete(channel.id)

        assert failures == 1
        mock_media.destroy_all.assert_awaited_once_with(
            [("seagulls/broadcasters/mona", "image"), ("seagulls/news/harbour", "image")]
        )
        session.delete.assert_awaited_once_with(channel)
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_missing(self, mock_db_session_factory, mock_media):
        factory, session = mock_db_session_factory
        service = ChannelService(db_session_factory=factory, media=mock_media)

        with pytest.raises(RecordNotFoundError):
            await service.delete(uuid.uuid4())

        mock_media.destroy_all.assert_not_called()
