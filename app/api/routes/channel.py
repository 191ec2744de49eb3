"""Channel routes (``/api/channel``)."""

import uuid

from fastapi import APIRouter, Depends, status

from app.api.deps import get_channel_service, require_superadmin
from app.api.responses import dump, envelope
from app.schemas.channel import ChannelIn, ChannelOut
from app.services.content import ChannelService

router = APIRouter(prefix="/api/channel", tags=["channel"])


@router.post("/", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_superadmin)])
async def create_channel(
    data: ChannelIn,
    service: ChannelService = Depends(get_channel_service),
) -> dict:
    channel = await service.create(data)
    return envelope(dump(ChannelOut, channel), message="Channel created successfully")


@router.get("/")
async def list_channels(service: ChannelService = Depends(get_channel_service)) -> dict:
    return envelope(dump(ChannelOut, await service.list_channels()))


@router.get("/{channel_id}")
async def get_channel(
    channel_id: uuid.UUID,
    service: ChannelService = Depends(get_channel_service),
) -> dict:
    return envelope(dump(ChannelOut, await service.get(channel_id)))


@router.put("/{channel_id}", dependencies=[Depends(require_superadmin)])
async def update_channel(
    channel_id: uuid.UUID,
    data: ChannelIn,
    service: ChannelService = Depends(get_channel_service),
) -> dict:
    channel = await service.update(channel_id, data)
    return envelope(dump(ChannelOut, channel), message="Channel updated successfully")


@router.delete("/{channel_id}", dependencies=[Depends(require_superadmin)])
async def delete_channel(
    channel_id: uuid.UUID,
    service: ChannelService = Depends(get_channel_service),
) -> dict:
    await service.delete(channel_id)
    return envelope(message="Channel deleted successfully")
