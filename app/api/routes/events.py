"""Event routes (``/api/events``)."""

import uuid

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_event_service, require_staff
from app.api.forms import form_body
from app.api.responses import dump, envelope
from app.api.uploads import FileKind, staged_file
from app.core.types import LocalFile
from app.schemas.event import EventCreate, EventOut, EventUpdate
from app.services.content import EventService

router = APIRouter(prefix="/api/events", tags=["events"])

image_upload = staged_file("image", FileKind.IMAGE)


@router.post("/", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_staff)])
async def create_event(
    data: EventCreate = Depends(form_body(EventCreate)),
    image: LocalFile | None = Depends(image_upload),
    service: EventService = Depends(get_event_service),
) -> dict:
    event = await service.create(data, image)
    return envelope(dump(EventOut, event), message="Event created successfully")


@router.get("/")
async def list_events(
    channel_id: uuid.UUID | None = Query(default=None, alias="channelId"),
    service: EventService = Depends(get_event_service),
) -> dict:
    events = await service.list_records(channel_id)
    return envelope(dump(EventOut, events), message="Events fetched successfully")


@router.get("/{event_id}")
async def get_event(event_id: uuid.UUID, service: EventService = Depends(get_event_service)) -> dict:
    event = await service.get(event_id)
    return envelope(dump(EventOut, event), message="Event fetched successfully")


@router.put("/{event_id}", dependencies=[Depends(require_staff)])
async def update_event(
    event_id: uuid.UUID,
    data: EventUpdate = Depends(form_body(EventUpdate)),
    image: LocalFile | None = Depends(image_upload),
    service: EventService = Depends(get_event_service),
) -> dict:
    event = await service.update(event_id, data, image)
    return envelope(dump(EventOut, event), message="Event updated successfully")


@router.delete("/{event_id}", dependencies=[Depends(require_staff)])
async def delete_event(
    event_id: uuid.UUID,
    service: EventService = Depends(get_event_service),
) -> dict:
    await service.delete(event_id)
    return envelope(message="Event deleted successfully")
