"""Channel and content services.

This module provides CRUD services for the station's channels and the
content each channel owns:
- ChannelService: Channel registry with cascade cleanup
- BroadcasterService, ProgramService, InterviewService: On-air staff and schedule
- NewsService, EventService, CompetitionService: Editorial content
- AdvertisementService, ApplicantService: Inbound listener requests
- StaticInfoService: Per-channel website settings
"""

from app.services.content.advertisement import AdvertisementService
from app.services.content.base import ContentService
from app.services.content.broadcaster import BroadcasterService
from app.services.content.channel import ChannelService
from app.services.content.competition import CompetitionService
from app.services.content.event import EventService
from app.services.content.interview import ApplicantService, InterviewService
from app.services.content.news import NewsService
from app.services.content.program import ProgramService
from app.services.content.static_info import StaticInfoService

__all__ = [
    "AdvertisementService",
    "ApplicantService",
    "BroadcasterService",
    "ChannelService",
    "CompetitionService",
    "ContentService",
    "EventService",
    "InterviewService",
    "NewsService",
    "ProgramService",
    "StaticInfoService",
]
