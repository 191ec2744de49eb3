"""Per-channel static information routes (``/api/staticinfo``).

Records are addressed by channel id, one per channel. Create and update
accept a ``frequencyimg`` image and a square ``favIcon``.
"""

import uuid

from fastapi import APIRouter, Depends, status

from app.api.deps import get_static_info_service, require_staff
from app.api.forms import form_body
from app.api.responses import dump, envelope
from app.api.uploads import FileKind, staged_file
from app.core.types import LocalFile
from app.schemas.static_info import StaticInfoCreate, StaticInfoOut, StaticInfoUpdate
from app.services.content import StaticInfoService
from app.services.content.static_info import RECOMMENDED_SIZES, check_favicon

router = APIRouter(prefix="/api/staticinfo", tags=["staticinfo"])

frequency_upload = staged_file("frequencyimg", FileKind.IMAGE)
favicon_upload = staged_file("favIcon", FileKind.IMAGE)


@router.post("/", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_staff)])
async def create_static_info(
    data: StaticInfoCreate = Depends(form_body(StaticInfoCreate)),
    frequency_image: LocalFile | None = Depends(frequency_upload),
    fav_icon: LocalFile | None = Depends(favicon_upload),
    service: StaticInfoService = Depends(get_static_info_service),
) -> dict:
    info, measured = await service.create(data, frequency_image, fav_icon)
    return envelope(
        dump(StaticInfoOut, info),
        message="Static info created successfully",
        favIconDimensions=measured.as_dict(),
        recommendedFavIconSizes=RECOMMENDED_SIZES,
    )


@router.get("/")
async def list_static_info(service: StaticInfoService = Depends(get_static_info_service)) -> dict:
    return envelope(dump(StaticInfoOut, await service.list_records()))


@router.get("/{channel_id}")
async def get_static_info(
    channel_id: uuid.UUID,
    service: StaticInfoService = Depends(get_static_info_service),
) -> dict:
    return envelope(dump(StaticInfoOut, await service.get_by_channel(channel_id)))


@router.put("/{channel_id}", dependencies=[Depends(require_staff)])
async def update_static_info(
    channel_id: uuid.UUID,
    data: StaticInfoUpdate = Depends(form_body(StaticInfoUpdate)),
    frequency_image: LocalFile | None = Depends(frequency_upload),
    fav_icon: LocalFile | None = Depends(favicon_upload),
    service: StaticInfoService = Depends(get_static_info_service),
) -> dict:
    info = await service.update_by_channel(channel_id, data, frequency_image, fav_icon)
    body = envelope(dump(StaticInfoOut, info), message="Static info updated successfully")
    if fav_icon is not None:
        body["favIconDimensions"] = check_favicon(fav_icon).as_dict()
        body["recommendedFavIconSizes"] = RECOMMENDED_SIZES
    return body


@router.delete("/{channel_id}", dependencies=[Depends(require_staff)])
async def delete_static_info(
    channel_id: uuid.UUID,
    service: StaticInfoService = Depends(get_static_info_service),
) -> dict:
    await service.delete_by_channel(channel_id)
    return envelope(message="Static info deleted successfully")
