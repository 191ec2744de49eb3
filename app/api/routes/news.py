"""News routes (``/api/news``)."""

import uuid

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_news_service, require_staff
from app.api.forms import form_body
from app.api.responses import dump, envelope
from app.api.uploads import FileKind, staged_file
from app.core.types import LocalFile
from app.schemas.news import NewsCreate, NewsOut, NewsUpdate
from app.services.content import NewsService

router = APIRouter(prefix="/api/news", tags=["news"])

image_upload = staged_file("image", FileKind.IMAGE)


@router.post("/", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_staff)])
async def create_news(
    data: NewsCreate = Depends(form_body(NewsCreate)),
    image: LocalFile | None = Depends(image_upload),
    service: NewsService = Depends(get_news_service),
) -> dict:
    news = await service.create(data, image)
    return envelope(dump(NewsOut, news), message="News article created successfully")


@router.get("/")
async def list_news(
    channel_id: uuid.UUID | None = Query(default=None, alias="channelId"),
    service: NewsService = Depends(get_news_service),
) -> dict:
    return envelope(dump(NewsOut, await service.list_records(channel_id)))


@router.get("/{news_id}")
async def get_news(news_id: uuid.UUID, service: NewsService = Depends(get_news_service)) -> dict:
    return envelope(dump(NewsOut, await service.get(news_id)))


@router.put("/{news_id}", dependencies=[Depends(require_staff)])
async def update_news(
    news_id: uuid.UUID,
    data: NewsUpdate = Depends(form_body(NewsUpdate)),
    image: LocalFile | None = Depends(image_upload),
    service: NewsService = Depends(get_news_service),
) -> dict:
    news = await service.update(news_id, data, image)
    return envelope(dump(NewsOut, news), message="News article updated successfully")


@router.delete("/{news_id}", dependencies=[Depends(require_staff)])
async def delete_news(news_id: uuid.UUID, service: NewsService = Depends(get_news_service)) -> dict:
    await service.delete(news_id)
    return envelope(message="News article deleted successfully")
