"""Advertisement enquiry routes (``/api/advertisement``).

Anyone may submit an enquiry. Reading and removing them is staff only.
"""

import uuid

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_advertisement_service, require_staff
from app.api.responses import dump, envelope
from app.schemas.advertisement import AdvertisementCreate, AdvertisementOut
from app.services.content import AdvertisementService

router = APIRouter(prefix="/api/advertisement", tags=["advertisement"])


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_advertisement(
    data: AdvertisementCreate,
    service: AdvertisementService = Depends(get_advertisement_service),
) -> dict:
    ad = await service.create(data)
    return envelope(dump(AdvertisementOut, ad), message="Advertisement created successfully")


@router.get("/", dependencies=[Depends(require_staff)])
async def list_advertisements(
    channel_id: uuid.UUID | None = Query(default=None, alias="channelId"),
    service: AdvertisementService = Depends(get_advertisement_service),
) -> dict:
    ads = await service.list_records(channel_id)
    return envelope(dump(AdvertisementOut, ads), message="Advertisements fetched successfully")


@router.get("/{ad_id}", dependencies=[Depends(require_staff)])
async def get_advertisement(
    ad_id: uuid.UUID,
    service: AdvertisementService = Depends(get_advertisement_service),
) -> dict:
    ad = await service.get(ad_id)
    return envelope(dump(AdvertisementOut, ad), message="Advertisement fetched successfully")


@router.delete("/{ad_id}", dependencies=[Depends(require_staff)])
async def delete_advertisement(
    ad_id: uuid.UUID,
    service: AdvertisementService = Depends(get_advertisement_service),
) -> dict:
    await service.delete(ad_id)
    return envelope(message="Advertisement deleted successfully")
