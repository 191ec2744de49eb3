"""Interview and interview applicant routes.

Interviews live under ``/api/interview`` and carry a video in the
``content`` form field. Applications arrive publicly at
``/api/interviewapplicant`` and are triaged by staff.
"""

import uuid

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_applicant_service, get_interview_service, require_staff
from app.api.forms import form_body
from app.api.responses import dump, envelope
from app.api.uploads import FileKind, staged_file
from app.core.types import LocalFile
from app.schemas.interview import (
    ApplicantCreate,
    ApplicantOut,
    ApplicantStatusUpdate,
    InterviewCreate,
    InterviewOut,
    InterviewUpdate,
)
from app.services.content import ApplicantService, InterviewService

router = APIRouter(prefix="/api/interview", tags=["interview"])
applicant_router = APIRouter(prefix="/api/interviewapplicant", tags=["interview"])

video_upload = staged_file("content", FileKind.MEDIA)


# ============================================
# Interviews
# ============================================


@router.post("/", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_staff)])
async def create_interview(
    data: InterviewCreate = Depends(form_body(InterviewCreate)),
    content: LocalFile | None = Depends(video_upload),
    service: InterviewService = Depends(get_interview_service),
) -> dict:
    interview = await service.create(data, content)
    return envelope(dump(InterviewOut, interview), message="Interview created successfully")


@router.get("/")
async def list_interviews(
    channel_id: uuid.UUID | None = Query(default=None, alias="channelId"),
    service: InterviewService = Depends(get_interview_service),
) -> dict:
    return envelope(dump(InterviewOut, await service.list_records(channel_id)))


@router.get("/{interview_id}")
async def get_interview(
    interview_id: uuid.UUID,
    service: InterviewService = Depends(get_interview_service),
) -> dict:
    return envelope(dump(InterviewOut, await service.get(interview_id)))


@router.put("/{interview_id}", dependencies=[Depends(require_staff)])
async def update_interview(
    interview_id: uuid.UUID,
    data: InterviewUpdate = Depends(form_body(InterviewUpdate)),
    content: LocalFile | None = Depends(video_upload),
    service: InterviewService = Depends(get_interview_service),
) -> dict:
    interview = await service.update(interview_id, data, content)
    return envelope(dump(InterviewOut, interview), message="Interview updated successfully")


@router.delete("/{interview_id}", dependencies=[Depends(require_staff)])
async def delete_interview(
    interview_id: uuid.UUID,
    service: InterviewService = Depends(get_interview_service),
) -> dict:
    await service.delete(interview_id)
    return envelope(message="Interview deleted successfully")


# ============================================
# Applicants
# ============================================


@applicant_router.post("/", status_code=status.HTTP_201_CREATED)
async def create_applicant(
    data: ApplicantCreate,
    service: ApplicantService = Depends(get_applicant_service),
) -> dict:
    applicant = await service.create(data)
    return envelope(
        dump(ApplicantOut, applicant), message="Interview applicant created successfully"
    )


@applicant_router.get("/", dependencies=[Depends(require_staff)])
async def list_applicants(
    channel_id: uuid.UUID | None = Query(default=None, alias="channelId"),
    service: ApplicantService = Depends(get_applicant_service),
) -> dict:
    return envelope(dump(ApplicantOut, await service.list_records(channel_id)))


@applicant_router.get("/{applicant_id}", dependencies=[Depends(require_staff)])
async def get_applicant(
    applicant_id: uuid.UUID,
    service: ApplicantService = Depends(get_applicant_service),
) -> dict:
    return envelope(dump(ApplicantOut, await service.get(applicant_id)))


@applicant_router.put("/{applicant_id}", dependencies=[Depends(require_staff)])
async def update_applicant_status(
    applicant_id: uuid.UUID,
    data: ApplicantStatusUpdate,
    service: ApplicantService = Depends(get_applicant_service),
) -> dict:
    applicant = await service.update_status(applicant_id, data)
    return envelope(
        dump(ApplicantOut, applicant), message="Interview applicant status updated successfully"
    )


@applicant_router.delete("/{applicant_id}", dependencies=[Depends(require_staff)])
async def delete_applicant(
    applicant_id: uuid.UUID,
    service: ApplicantService = Depends(get_applicant_service),
) -> dict:
    await service.delete(applicant_id)
    return envelope(message="Interview applicant deleted successfully")
