from .auth import MessageResponse, RegisterRequest, RegisterResponse, Token
from .feedback import (
    ContactMessageCreate,
    ContactMessageRead,
    DashboardStatsRead,
    FeedbackCreate,
    FeedbackRead,
    FeedbackResponseUpdate,
    PurgeResultRead,
)
from .job import (
    ApplicationCreate,
    ApplicationRead,
    ApplicationStatusUpdate,
    ApplicationWithJobRead,
    JobCreate,
    JobRead,
    JobUpdate,
)
from .message import (
    ConversationCreate,
    ConversationRead,
    MessageCreate,
    MessageRead,
    UnreadCountRead,
)
from .notification import (
    CategoryCountsRead,
    JobAlertFilterRead,
    JobAlertFilterWrite,
    MarkedCountRead,
    NotificationCreate,
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
    NotificationRead,
)
from .profile import (
    FreelancerProfileRead,
    ProfileRead,
    ProfileUpdate,
    RecruiterProfileRead,
)
from .rating import (
    AverageRatingRead,
    RatingCreate,
    RatingRead,
    RatingRequestCreate,
    RatingRequestRead,
)
from .user import RoleUpdate, UserRead, UserSummaryRead, UserUpdate

__all__ = [
    "ApplicationCreate",
    "ApplicationRead",
    "ApplicationStatusUpdate",
    "ApplicationWithJobRead",
    "AverageRatingRead",
    "CategoryCountsRead",
    "ContactMessageCreate",
    "ContactMessageRead",
    "ConversationCreate",
    "ConversationRead",
    "DashboardStatsRead",
    "FeedbackCreate",
    "FeedbackRead",
    "FeedbackResponseUpdate",
    "FreelancerProfileRead",
    "JobAlertFilterRead",
    "JobAlertFilterWrite",
    "JobCreate",
    "JobRead",
    "JobUpdate",
    "MarkedCountRead",
    "MessageCreate",
    "MessageRead",
    "MessageResponse",
    "NotificationCreate",
    "NotificationPreferencesRead",
    "NotificationPreferencesUpdate",
    "NotificationRead",
    "ProfileRead",
    "ProfileUpdate",
    "RatingCreate",
    "RatingRead",
    "RatingRequestCreate",
    "RatingRequestRead",
    "RecruiterProfileRead",
    "RegisterRequest",
    "RegisterResponse",
    "RoleUpdate",
    "Token",
    "UnreadCountRead",
    "UserRead",
    "UserSummaryRead",
    "UserUpdate",
]
