"""ORM models used by the application infrastructure."""

from .conversation import ConversationModel, MessageModel, MessageUserStateModel
from .feedback import ContactMessageModel, FeedbackModel
from .job import JobApplicationModel, JobModel
from .notification import NotificationModel
from .notification_preferences import JobAlertFilterModel, NotificationPreferencesModel
from .profile import FreelancerProfileModel, RecruiterProfileModel
from .rating import RatingModel, RatingRequestModel
from .user import UserModel

__all__ = [
    "ContactMessageModel",
    "ConversationModel",
    "FeedbackModel",
    "FreelancerProfileModel",
    "JobAlertFilterModel",
    "JobApplicationModel",
    "JobModel",
    "MessageModel",
    "MessageUserStateModel",
    "NotificationModel",
    "NotificationPreferencesModel",
    "RatingModel",
    "RatingRequestModel",
    "RecruiterProfileModel",
    "UserModel",
]
