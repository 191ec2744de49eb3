"""Competition routes (``/api/competition``)."""

import uuid

from fastapi import APIRouter, Depends, status

from app.api.deps import get_competition_service, require_staff, require_user
from app.api.responses import dump, envelope
from app.models.principal import Principal
from app.schemas.competition import (
    CompetitionCreate,
    CompetitionOut,
    CompetitionUpdate,
    CompetitionWithSubmissions,
    SubmissionCreate,
    SubmissionOut,
)
from app.services.content import CompetitionService

router = APIRouter(prefix="/api/competition", tags=["competition"])


@router.post("/", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_staff)])
async def create_competition(
    data: CompetitionCreate,
    service: CompetitionService = Depends(get_competition_service),
) -> dict:
    competition = await service.create(data)
    return envelope(dump(CompetitionOut, competition), message="Competition created successfully")


@router.get("/", dependencies=[Depends(require_staff)])
async def list_competitions(service: CompetitionService = Depends(get_competition_service)) -> dict:
    competitions = await service.list_with_submissions()
    return envelope(
        dump(CompetitionWithSubmissions, competitions), message="Competitions fetched successfully"
    )


@router.get("/{competition_id}")
async def get_competition(
    competition_id: uuid.UUID,
    service: CompetitionService = Depends(get_competition_service),
) -> dict:
    competition = await service.get(competition_id)
    return envelope(dump(CompetitionOut, competition), message="Competition fetched successfully")


@router.get("/{competition_id}/submissions", dependencies=[Depends(require_staff)])
async def list_submissions(
    competition_id: uuid.UUID,
    service: CompetitionService = Depends(get_competition_service),
) -> dict:
    competition = await service.get_with_submissions(competition_id)
    return envelope(dump(SubmissionOut, list(competition.submissions)))


@router.post("/{competition_id}/submission", status_code=status.HTTP_201_CREATED)
async def add_submission(
    competition_id: uuid.UUID,
    data: SubmissionCreate,
    user: Principal = Depends(require_user),
    service: CompetitionService = Depends(get_competition_service),
) -> dict:
    submission = await service.add_submission(competition_id, user, data)
    return envelope(dump(SubmissionOut, submission), message="Submission added successfully")


@router.put("/{competition_id}", dependencies=[Depends(require_staff)])
async def update_competition(
    competition_id: uuid.UUID,
    data: CompetitionUpdate,
    service: CompetitionService = Depends(get_competition_service),
) -> dict:
    competition = await service.update(competition_id, data)
    return envelope(dump(CompetitionOut, competition), message="Competition updated successfully")


@router.delete("/{competition_id}", dependencies=[Depends(require_staff)])
async def delete_competition(
    competition_id: uuid.UUID,
    service: CompetitionService = Depends(get_competition_service),
) -> dict:
    await service.delete(competition_id)
    return envelope(message="Competition and its submissions deleted successfully")
