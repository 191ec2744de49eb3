"""Listener track submission routes (``/api/uploadtrack``)."""

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import (
    get_current_principal,
    get_track_workflow,
    require_staff,
    require_user,
)
from app.api.forms import form_body
from app.api.responses import dump, envelope
from app.api.uploads import FileKind, staged_file
from app.core.types import LocalFile
from app.models.principal import Principal
from app.models.upload_track import TrackStatus
from app.schemas.track import (
    ApprovalOut,
    ApprovedTrackOut,
    TrackApproval,
    TrackFilters,
    TrackOut,
    TrackStatusUpdate,
    TrackSubmission,
)
from app.services.tracks import TrackWorkflow

router = APIRouter(prefix="/api/uploadtrack", tags=["uploadtrack"])

song_upload = staged_file("songFile", FileKind.MEDIA)


@router.post("/", status_code=status.HTTP_201_CREATED)
async def upload_track(
    user: Principal = Depends(require_user),
    data: TrackSubmission = Depends(form_body(TrackSubmission)),
    song_file: LocalFile | None = Depends(song_upload),
    workflow: TrackWorkflow = Depends(get_track_workflow),
) -> dict:
    track = await workflow.submit(user, data, song_file)
    return envelope(
        dump(TrackOut, track),
        message="Track uploaded successfully. It is now pending approval.",
    )


@router.get("/my-tracks")
async def my_tracks(
    user: Principal = Depends(require_user),
    workflow: TrackWorkflow = Depends(get_track_workflow),
) -> dict:
    return envelope(dump(TrackOut, await workflow.my_tracks(user)))


@router.get("/approved/list")
async def approved_tracks(
    channel_id: uuid.UUID | None = Query(default=None, alias="channelId"),
    on_date: date | None = Query(default=None, alias="date"),
    workflow: TrackWorkflow = Depends(get_track_workflow),
) -> dict:
    slots = await workflow.approved_list(channel_id, on_date)
    return envelope(dump(ApprovedTrackOut, slots))


@router.get("/", dependencies=[Depends(require_staff)])
async def list_tracks(
    track_status: TrackStatus | None = Query(default=None, alias="status"),
    channel_id: uuid.UUID | None = Query(default=None, alias="channelId"),
    user_id: uuid.UUID | None = Query(default=None, alias="userId"),
    workflow: TrackWorkflow = Depends(get_track_workflow),
) -> dict:
    filters = TrackFilters(status=track_status, channel_id=channel_id, user_id=user_id)
    return envelope(dump(TrackOut, await workflow.list_tracks(filters)))


@router.get("/{track_id}")
async def get_track(
    track_id: uuid.UUID,
    principal: Principal = Depends(get_current_principal),
    workflow: TrackWorkflow = Depends(get_track_workflow),
) -> dict:
    return envelope(dump(TrackOut, await workflow.get(track_id, principal)))


@router.put("/{track_id}/status")
async def update_track_status(
    track_id: uuid.UUID,
    data: TrackStatusUpdate,
    admin: Principal = Depends(require_staff),
    workflow: TrackWorkflow = Depends(get_track_workflow),
) -> dict:
    track = await workflow.update_status(track_id, data.status, admin)
    return envelope(dump(TrackOut, track), message=f"Track status updated to {data.status.value}")


@router.post("/{track_id}/approve")
async def approve_track(
    track_id: uuid.UUID,
    slot: TrackApproval,
    admin: Principal = Depends(require_staff),
    workflow: TrackWorkflow = Depends(get_track_workflow),
) -> dict:
    result = await workflow.approve(track_id, admin, slot)
    return envelope(
        {
            "track": dump(TrackOut, result.track),
            "approvedTrack": dump(ApprovalOut, result.approved_track),
        },
        message="Track approved and scheduled successfully. User has been notified via email.",
    )


@router.delete("/{track_id}")
async def delete_track(
    track_id: uuid.UUID,
    principal: Principal = Depends(get_current_principal),
    workflow: TrackWorkflow = Depends(get_track_workflow),
) -> dict:
    await workflow.delete(track_id, principal)
    return envelope(message="Track deleted successfully")
