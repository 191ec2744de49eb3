"""HTTP route modules.

Each module exposes an ``APIRouter`` mounted under ``/api``.
"""

from fastapi import APIRouter

from app.api.routes import (
    admin,
    advertisement,
    broadcaster,
    channel,
    competition,
    events,
    interview,
    news,
    program,
    staticinfo,
    uploadtrack,
    user,
)

ROUTERS: list[APIRouter] = [
    user.router,
    admin.router,
    channel.router,
    broadcaster.router,
    program.router,
    interview.router,
    interview.applicant_router,
    news.router,
    events.router,
    advertisement.router,
    competition.router,
    staticinfo.router,
    uploadtrack.router,
]

__all__ = ["ROUTERS"]
