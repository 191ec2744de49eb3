"""News service."""

import uuid

from app.core.exceptions import InputValidationError
from app.core.types import LocalFile
from app.models.news import News
from app.schemas.news import NewsCreate, NewsUpdate
from app.services.content.base import ContentService

FOLDER = "seagulls/news"


class NewsService(ContentService[News]):
    """News articles, listed newest first."""

    model = News
    not_found_message = "News article not found"
    channel_missing_status = 404

    async def create(self, data: NewsCreate, image: LocalFile | None) -> News:
        """Create an article.

        Raises:
            InputValidationError: If the image is missing
            RecordNotFoundError: If the channel is unknown
            MediaUploadError: If the image upload fails
        """
        if image is None:
            raise InputValidationError("Image is required", field="image")

        async with self.db_session_factory() as session:
            await self._ensure_channel(session, data.channel_id)
            asset = await self._upload(image, "image", FOLDER)
            news = News(
                channel_id=data.channel_id,
                title=data.title,
                image=asset.as_media(),
                description=data.description,
                content=data.content,
            )
            if data.published_at is not None:
                news.published_at = data.published_at
            return await self._persist(session, news)

    async def update(
        self,
        news_id: uuid.UUID,
        data: NewsUpdate,
        image: LocalFile | None = None,
    ) -> News:
        async with self.db_session_factory() as session:
            news = await self._load(session, news_id)
            changes = data.model_dump(exclude_unset=True, exclude_none=True)
            if data.channel_id is not None:
                await self._ensure_channel(session, data.channel_id)
            if image is not None:
                asset = await self._replace_media(news.image, image, "image", FOLDER)
                changes["image"] = asset.as_media()
            self._apply(news, changes)
            return await self._persist(session, news)


__all__ = ["NewsService"]
