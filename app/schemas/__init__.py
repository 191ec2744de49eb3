"""Request and response models.

Wire names are camelCase; Python attributes are snake_case.
"""

from app.schemas.advertisement import AdvertisementCreate, AdvertisementOut
from app.schemas.base import ChannelRef, FormModel, RecordOut, RequestModel, ResponseModel
from app.schemas.broadcaster import BroadcasterCreate, BroadcasterOut, BroadcasterUpdate
from app.schemas.channel import ChannelIn, ChannelOut
from app.schemas.competition import (
    CompetitionCreate,
    CompetitionOut,
    CompetitionUpdate,
    CompetitionWithSubmissions,
    SubmissionCreate,
    SubmissionOut,
)
from app.schemas.event import EventCreate, EventOut, EventUpdate
from app.schemas.identity import (
    AccountCreate,
    ChangePasswordRequest,
    LoginRequest,
    PrincipalOut,
    PrincipalRef,
    ProfileUpdateForm,
    RegisterForm,
    ResetPasswordRequest,
    SendOtpRequest,
    VerifyOtpRequest,
)
from app.schemas.interview import (
    ApplicantCreate,
    ApplicantOut,
    ApplicantStatusUpdate,
    InterviewCreate,
    InterviewOut,
    InterviewUpdate,
)
from app.schemas.news import NewsCreate, NewsOut, NewsUpdate
from app.schemas.program import ProgramCreate, ProgramOut, ProgramRef, ProgramUpdate
from app.schemas.static_info import StaticInfoCreate, StaticInfoOut, StaticInfoUpdate
from app.schemas.track import (
    ApprovalOut,
    ApprovedTrackOut,
    TrackApproval,
    TrackFilters,
    TrackOut,
    TrackStatusUpdate,
    TrackSubmission,
    TrackSummary,
)

__all__ = [
    # Base
    "ChannelRef",
    "FormModel",
    "RecordOut",
    "RequestModel",
    "ResponseModel",
    # Identity
    "AccountCreate",
    "ChangePasswordRequest",
    "LoginRequest",
    "PrincipalOut",
    "PrincipalRef",
    "ProfileUpdateForm",
    "RegisterForm",
    "ResetPasswordRequest",
    "SendOtpRequest",
    "VerifyOtpRequest",
    # Content
    "AdvertisementCreate",
    "AdvertisementOut",
    "ApplicantCreate",
    "ApplicantOut",
    "ApplicantStatusUpdate",
    "BroadcasterCreate",
    "BroadcasterOut",
    "BroadcasterUpdate",
    "ChannelIn",
    "ChannelOut",
    "CompetitionCreate",
    "CompetitionOut",
    "CompetitionUpdate",
    "CompetitionWithSubmissions",
    "EventCreate",
    "EventOut",
    "EventUpdate",
    "InterviewCreate",
    "InterviewOut",
    "InterviewUpdate",
    "NewsCreate",
    "NewsOut",
    "NewsUpdate",
    "ProgramCreate",
    "ProgramOut",
    "ProgramRef",
    "ProgramUpdate",
    "StaticInfoCreate",
    "StaticInfoOut",
    "StaticInfoUpdate",
    "SubmissionCreate",
    "SubmissionOut",
    # Tracks
    "ApprovalOut",
    "ApprovedTrackOut",
    "TrackApproval",
    "TrackFilters",
    "TrackOut",
    "TrackStatusUpdate",
    "TrackSubmission",
    "TrackSummary",
]
