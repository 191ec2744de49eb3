"""SQLAlchemy ORM models.

Models are organized by feature:
- Identity: Principal
- Station: Channel, Broadcaster, Program, StaticInfo
- Content: News, Event, Interview, Competition
- Inbound: Advertisement, InterviewApplicant, UploadTrack
"""

from app.models.advertisement import Advertisement
from app.models.base import Base, ChannelScopedMixin, MediaMixin, TimestampMixin, UUIDMixin
from app.models.broadcaster import Broadcaster
from app.models.channel import Channel
from app.models.competition import Competition, CompetitionSubmission
from app.models.event import Event, EventType
from app.models.interview import ApplicantStatus, Interview, InterviewApplicant
from app.models.news import News
from app.models.principal import STAFF_ROLES, Principal, Role
from app.models.program import Program, ProgramStatus, Weekday
from app.models.static_info import FAVICON_SIZES, StaticInfo
from app.models.upload_track import ApprovedTrack, Genre, TrackStatus, UploadTrack

__all__ = [
    "Base",
    "UUIDMixin",
    "TimestampMixin",
    "ChannelScopedMixin",
    "MediaMixin",
    # Identity
    "Principal",
    "Role",
    "STAFF_ROLES",
    # Station
    "Channel",
    "Broadcaster",
    "Program",
    "ProgramStatus",
    "Weekday",
    "StaticInfo",
    "FAVICON_SIZES",
    # Content
    "News",
    "Event",
    "EventType",
    "Interview",
    "Competition",
    "CompetitionSubmission",
    # Inbound
    "Advertisement",
    "InterviewApplicant",
    "ApplicantStatus",
    "UploadTrack",
    "ApprovedTrack",
    "TrackStatus",
    "Genre",
]
