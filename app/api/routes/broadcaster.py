"""Broadcaster routes (``/api/broadcaster``)."""

import uuid

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_broadcaster_service, require_staff
from app.api.forms import form_body
from app.api.responses import dump, envelope
from app.api.uploads import FileKind, staged_file
from app.core.types import LocalFile
from app.schemas.broadcaster import BroadcasterCreate, BroadcasterOut, BroadcasterUpdate
from app.services.content import BroadcasterService

router = APIRouter(prefix="/api/broadcaster", tags=["broadcaster"])

image_upload = staged_file("image", FileKind.IMAGE)


@router.post("/", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_staff)])
async def create_broadcaster(
    data: BroadcasterCreate = Depends(form_body(BroadcasterCreate)),
    image: LocalFile | None = Depends(image_upload),
    service: BroadcasterService = Depends(get_broadcaster_service),
) -> dict:
    broadcaster = await service.create(data, image)
    return envelope(dump(BroadcasterOut, broadcaster), message="Broadcaster created successfully")


@router.get("/")
async def list_broadcasters(
    channel_id: uuid.UUID | None = Query(default=None, alias="channelId"),
    service: BroadcasterService = Depends(get_broadcaster_service),
) -> dict:
    return envelope(dump(BroadcasterOut, await service.list_records(channel_id)))


@router.get("/{broadcaster_id}")
async def get_broadcaster(
    broadcaster_id: uuid.UUID,
    service: BroadcasterService = Depends(get_broadcaster_service),
) -> dict:
    return envelope(dump(BroadcasterOut, await service.get(broadcaster_id)))


@router.put("/{broadcaster_id}", dependencies=[Depends(require_staff)])
async def update_broadcaster(
    broadcaster_id: uuid.UUID,
    data: BroadcasterUpdate = Depends(form_body(BroadcasterUpdate)),
    image: LocalFile | None = Depends(image_upload),
    service: BroadcasterService = Depends(get_broadcaster_service),
) -> dict:
    broadcaster = await service.update(broadcaster_id, data, image)
    return envelope(dump(BroadcasterOut, broadcaster), message="Broadcaster updated successfully")


@router.delete("/{broadcaster_id}", dependencies=[Depends(require_staff)])
async def delete_broadcaster(
    broadcaster_id: uuid.UUID,
    service: BroadcasterService = Depends(get_broadcaster_service),
) -> dict:
    await service.delete(broadcaster_id)
    return envelope(message="Broadcaster deleted successfully")
