"""Domain entities exposed by the application."""

from .conversation import Conversation, Message
from .feedback import (
    CONTACT_MESSAGE_STATUSES,
    FEEDBACK_STATUSES,
    FEEDBACK_TYPES,
    ContactMessage,
    Feedback,
)
from .job import (
    ACTIVE_APPLICATION_STATUSES,
    APPLICATION_STATUSES,
    APPLICATION_STATUS_APPLIED,
    APPLICATION_STATUS_HIRED,
    APPLICATION_STATUS_REJECTED,
    APPLICATION_STATUS_REVIEWED,
    APPLICATION_STATUS_SHORTLISTED,
    JOB_STATUSES,
    JOB_STATUS_ACTIVE,
    JOB_STATUS_CLOSED,
    JOB_STATUS_PAUSED,
    JOB_TYPES,
    Job,
    JobApplication,
)
from .job_alert_filter import JobAlertFilter
from .notification import (
    CATEGORY_APPLICATIONS,
    CATEGORY_CONTACT_MESSAGES,
    CATEGORY_FEEDBACK,
    CATEGORY_JOBS,
    CATEGORY_MESSAGES,
    CATEGORY_RATINGS,
    NOTIFICATION_CATEGORIES,
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_TYPES,
    NOTIFICATION_TYPE_APPLICATION_UPDATE,
    NOTIFICATION_TYPE_CONTACT_MESSAGE,
    NOTIFICATION_TYPE_FEEDBACK,
    NOTIFICATION_TYPE_JOB_UPDATE,
    NOTIFICATION_TYPE_NEW_MESSAGE,
    NOTIFICATION_TYPE_PROFILE_VIEW,
    NOTIFICATION_TYPE_RATING_RECEIVED,
    NOTIFICATION_TYPE_RATING_REQUEST,
    NOTIFICATION_TYPE_SYSTEM,
    RELATED_ENTITY_TYPES,
    BadgeCounts,
    Notification,
    category_for_type,
    types_for_category,
)
from .notification_preferences import (
    DIGEST_MODES,
    DIGEST_MODE_DAILY,
    DIGEST_MODE_INSTANT,
    DIGEST_MODE_WEEKLY,
    EMAIL_PREFERENCE_FIELDS,
    NotificationPreferences,
)
from .profile import AVAILABILITY_STATUSES, FreelancerProfile, RecruiterProfile
from .rating import (
    RATING_REQUEST_COMPLETED,
    RATING_REQUEST_DECLINED,
    RATING_REQUEST_PENDING,
    Rating,
    RatingRequest,
)
from .user import (
    ROLE_ADMIN,
    ROLE_FREELANCER,
    ROLE_RECRUITER,
    SELF_SERVICE_ROLES,
    USER_ROLES,
    User,
)

__all__ = [
    "ACTIVE_APPLICATION_STATUSES",
    "APPLICATION_STATUSES",
    "APPLICATION_STATUS_APPLIED",
    "APPLICATION_STATUS_HIRED",
    "APPLICATION_STATUS_REJECTED",
    "APPLICATION_STATUS_REVIEWED",
    "APPLICATION_STATUS_SHORTLISTED",
    "AVAILABILITY_STATUSES",
    "BadgeCounts",
    "CATEGORY_APPLICATIONS",
    "CATEGORY_CONTACT_MESSAGES",
    "CATEGORY_FEEDBACK",
    "CATEGORY_JOBS",
    "CATEGORY_MESSAGES",
    "CATEGORY_RATINGS",
    "CONTACT_MESSAGE_STATUSES",
    "ContactMessage",
    "Conversation",
    "DIGEST_MODES",
    "DIGEST_MODE_DAILY",
    "DIGEST_MODE_INSTANT",
    "DIGEST_MODE_WEEKLY",
    "EMAIL_PREFERENCE_FIELDS",
    "FEEDBACK_STATUSES",
    "FEEDBACK_TYPES",
    "Feedback",
    "FreelancerProfile",
    "JOB_STATUSES",
    "JOB_STATUS_ACTIVE",
    "JOB_STATUS_CLOSED",
    "JOB_STATUS_PAUSED",
    "JOB_TYPES",
    "Job",
    "JobAlertFilter",
    "JobApplication",
    "Message",
    "NOTIFICATION_CATEGORIES",
    "NOTIFICATION_PRIORITIES",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_APPLICATION_UPDATE",
    "NOTIFICATION_TYPE_CONTACT_MESSAGE",
    "NOTIFICATION_TYPE_FEEDBACK",
    "NOTIFICATION_TYPE_JOB_UPDATE",
    "NOTIFICATION_TYPE_NEW_MESSAGE",
    "NOTIFICATION_TYPE_PROFILE_VIEW",
    "NOTIFICATION_TYPE_RATING_RECEIVED",
    "NOTIFICATION_TYPE_RATING_REQUEST",
    "NOTIFICATION_TYPE_SYSTEM",
    "Notification",
    "NotificationPreferences",
    "RATING_REQUEST_COMPLETED",
    "RATING_REQUEST_DECLINED",
    "RATING_REQUEST_PENDING",
    "RELATED_ENTITY_TYPES",
    "ROLE_ADMIN",
    "ROLE_FREELANCER",
    "ROLE_RECRUITER",
    "Rating",
    "RatingRequest",
    "RecruiterProfile",
    "SELF_SERVICE_ROLES",
    "USER_ROLES",
    "User",
    "category_for_type",
    "types_for_category",
]
