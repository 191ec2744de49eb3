"""Program routes (``/api/program``)."""

import uuid

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_program_service, require_staff
from app.api.forms import form_body
from app.api.responses import dump, envelope
from app.api.uploads import FileKind, staged_file
from app.core.types import LocalFile
from app.schemas.program import ProgramCreate, ProgramOut, ProgramUpdate
from app.services.content import ProgramService

router = APIRouter(prefix="/api/program", tags=["program"])

image_upload = staged_file("image", FileKind.IMAGE)


@router.post("/", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_staff)])
async def create_program(
    data: ProgramCreate = Depends(form_body(ProgramCreate)),
    image: LocalFile | None = Depends(image_upload),
    service: ProgramService = Depends(get_program_service),
) -> dict:
    program = await service.create(data, image)
    return envelope(dump(ProgramOut, program), message="Program created successfully")


@router.get("/")
async def list_programs(
    channel_id: uuid.UUID | None = Query(default=None, alias="channelId"),
    service: ProgramService = Depends(get_program_service),
) -> dict:
    return envelope(dump(ProgramOut, await service.list_records(channel_id)))


@router.get("/{program_id}")
async def get_program(
    program_id: uuid.UUID,
    service: ProgramService = Depends(get_program_service),
) -> dict:
    return envelope(dump(ProgramOut, await service.get(program_id)))


@router.put("/{program_id}", dependencies=[Depends(require_staff)])
async def update_program(
    program_id: uuid.UUID,
    data: ProgramUpdate = Depends(form_body(ProgramUpdate)),
    image: LocalFile | None = Depends(image_upload),
    service: ProgramService = Depends(get_program_service),
) -> dict:
    program = await service.update(program_id, data, image)
    return envelope(dump(ProgramOut, program), message="Program updated successfully")


@router.delete("/{program_id}", dependencies=[Depends(require_staff)])
async def delete_program(
    program_id: uuid.UUID,
    service: ProgramService = Depends(get_program_service),
) -> dict:
    await service.delete(program_id)
    return envelope(message="Program deleted successfully")
