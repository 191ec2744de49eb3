"""Staff account routes (``/api/admin``)."""

import uuid

from fastapi import APIRouter, Depends, Response, status

from app.api.deps import (
    get_auth_service,
    get_settings,
    get_staff_service,
    require_staff,
    require_superadmin,
    set_session_cookie,
)
from app.api.responses import dump, envelope
from app.core.config import Config
from app.models.principal import STAFF_ROLES, Principal
from app.schemas.identity import AccountCreate, LoginRequest, PrincipalOut
from app.services.identity import AuthService, StaffService

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/login")
async def login(
    data: LoginRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    config: Config = Depends(get_settings),
) -> dict:
    session = await auth.login(data.email, data.password, *STAFF_ROLES)
    set_session_cookie(response, session.token, config)
    return envelope(
        dump(PrincipalOut, session.principal), message="Login successful", token=session.token
    )


@router.get("/me")
async def me(admin: Principal = Depends(require_staff)) -> dict:
    return envelope(dump(PrincipalOut, admin))


@router.post("/", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_superadmin)])
async def create_admin(
    data: AccountCreate,
    staff: StaffService = Depends(get_staff_service),
) -> dict:
    admin = await staff.create_admin(data)
    return envelope(dump(PrincipalOut, admin), message="Admin created successfully")


@router.get("/", dependencies=[Depends(require_superadmin)])
async def list_admins(staff: StaffService = Depends(get_staff_service)) -> dict:
    return envelope(dump(PrincipalOut, await staff.list_admins()))


@router.delete("/{admin_id}", dependencies=[Depends(require_superadmin)])
async def delete_admin(
    admin_id: uuid.UUID,
    staff: StaffService = Depends(get_staff_service),
) -> dict:
    await staff.delete_admin(admin_id)
    return envelope(message="Admin deleted successfully")
