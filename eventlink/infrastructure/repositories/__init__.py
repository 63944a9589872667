"""Repository implementations for infrastructure layer."""

from .application_repository import JobApplicationRepository
from .conversation_repository import ConversationRepository
from .feedback_repository import ContactMessageRepository, FeedbackRepository
from .job_repository import JobRepository
from .notification_preferences_repository import (
    JobAlertFilterRepository,
    NotificationPreferencesRepository,
)
from .notification_repository import NotificationRepository
from .profile_repository import FreelancerProfileRepository, RecruiterProfileRepository
from .rating_repository import RatingRepository, RatingRequestRepository
from .user_repository import UserRepository

__all__ = [
    "ContactMessageRepository",
    "ConversationRepository",
    "FeedbackRepository",
    "FreelancerProfileRepository",
    "JobAlertFilterRepository",
    "JobApplicationRepository",
    "JobRepository",
    "NotificationPreferencesRepository",
    "NotificationRepository",
    "RatingRepository",
    "RatingRequestRepository",
    "RecruiterProfileRepository",
    "UserRepository",
]
