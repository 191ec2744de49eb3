"""FastAPI dependencies: sessions, role gates and service providers.

Services are resolved from the DI container, so tests can replace any of
them with ``app.dependency_overrides``.
"""

from collections.abc import Awaitable, Callable

from fastapi import Depends, Request, Response

from app.core.config import Config, get_config
from app.core.container import container
from app.core.exceptions import PermissionDeniedError
from app.models.principal import STAFF_ROLES, Principal, Role
from app.services.content import (
    AdvertisementService,
    ApplicantService,
    BroadcasterService,
    ChannelService,
    CompetitionService,
    EventService,
    InterviewService,
    NewsService,
    ProgramService,
    StaticInfoService,
)
from app.services.identity import AuthService, StaffService, UserService
from app.services.tracks import TrackWorkflow

# ============================================
# Service providers
# ============================================


def get_settings() -> Config:
    return get_config()


def get_auth_service() -> AuthService:
    return container.services.auth_service()


def get_user_service() -> UserService:
    return container.services.user_service()


def get_staff_service() -> StaffService:
    return container.services.staff_service()


def get_channel_service() -> ChannelService:
    return container.services.channel_service()


def get_broadcaster_service() -> BroadcasterService:
    return container.services.broadcaster_service()


def get_program_service() -> ProgramService:
    return container.services.program_service()


def get_interview_service() -> InterviewService:
    return container.services.interview_service()


def get_applicant_service() -> ApplicantService:
    return container.services.applicant_service()


def get_news_service() -> NewsService:
    return container.services.news_service()


def get_event_service() -> EventService:
    return container.services.event_service()


def get_advertisement_service() -> AdvertisementService:
    return container.services.advertisement_service()


def get_competition_service() -> CompetitionService:
    return container.services.competition_service()


def get_static_info_service() -> StaticInfoService:
    return container.services.static_info_service()


def get_track_workflow() -> TrackWorkflow:
    return container.services.track_workflow()


# ============================================
# Session cookie
# ============================================


def get_token(request: Request, config: Config = Depends(get_settings)) -> str | None:
    """Session token from the cookie, falling back to a Bearer header."""
    token = request.cookies.get(config.auth_cookie_name)
    if token:
        return token
    scheme, _, credentials = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


def set_session_cookie(response: Response, token: str, config: Config) -> None:
    response.set_cookie(
        key=config.auth_cookie_name,
        value=token,
        max_age=config.access_token_expire_minutes * 60,
        httponly=True,
        secure=config.auth_cookie_secure,
        samesite=config.auth_cookie_samesite,
    )


def clear_session_cookie(response: Response, config: Config) -> None:
    response.delete_cookie(
        key=config.auth_cookie_name,
        httponly=True,
        secure=config.auth_cookie_secure,
        samesite=config.auth_cookie_samesite,
    )


# ============================================
# Authentication and role gates
# ============================================


async def get_current_principal(
    token: str | None = Depends(get_token),
    auth: AuthService = Depends(get_auth_service),
) -> Principal:
    """Resolve the caller.

    Raises:
        AuthenticationError: 401 when the token is missing or invalid
    """
    return await auth.principal_from_token(token)


def require_roles(*roles: Role) -> Callable[..., Awaitable[Principal]]:
    """Build a dependency admitting only the given roles.

    Raises:
        PermissionDeniedError: 403 for any other role
    """

    async def dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        if not principal.has_role(*roles):
            raise PermissionDeniedError(
                f"Role {Role(principal.role).value} is not authorized to access this route"
            )
        return principal

    return dependency


require_user = require_roles(Role.USER)
require_staff = require_roles(*STAFF_ROLES)
require_superadmin = require_roles(Role.SUPERADMIN)


__all__ = [
    "clear_session_cookie",
    "get_current_principal",
    "get_token",
    "require_roles",
    "require_staff",
    "require_superadmin",
    "require_user",
    "set_session_cookie",
]
