"""Use cases for notifications, badge counts and email preferences."""

from .counts import get_category_counts, get_unread_count, push_badge_counts
from .digests import send_digests
from .emails import (
    Scheduler,
    deliver_notification_email,
    schedule_notification_email,
    send_notification_email,
)
from .job_alerts import (
    delete_job_alert,
    find_matching_freelancer_ids,
    get_job_alert,
    save_job_alert,
    update_job_alert,
)
from .preferences import (
    EMAIL_TYPE_APPLICATION_UPDATE,
    EMAIL_TYPE_JOB_ALERT,
    EMAIL_TYPE_JOB_UPDATE,
    EMAIL_TYPE_MESSAGE,
    EMAIL_TYPE_RATING_REQUEST,
    EMAIL_TYPE_SYSTEM,
    email_allowed,
    get_preferences,
    update_preferences,
)
from .reconciler import (
    delete_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_category_read,
    mark_conversation_notifications_read,
    mark_notification_read,
    purge_expired_notifications,
)
from .writer import create_notification, notify_admins, notify_users

__all__ = [
    "EMAIL_TYPE_APPLICATION_UPDATE",
    "EMAIL_TYPE_JOB_ALERT",
    "EMAIL_TYPE_JOB_UPDATE",
    "EMAIL_TYPE_MESSAGE",
    "EMAIL_TYPE_RATING_REQUEST",
    "EMAIL_TYPE_SYSTEM",
    "Scheduler",
    "create_notification",
    "delete_job_alert",
    "delete_notification",
    "deliver_notification_email",
    "email_allowed",
    "find_matching_freelancer_ids",
    "get_category_counts",
    "get_job_alert",
    "get_preferences",
    "get_unread_count",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_category_read",
    "mark_conversation_notifications_read",
    "mark_notification_read",
    "notify_admins",
    "notify_users",
    "purge_expired_notifications",
    "push_badge_counts",
    "save_job_alert",
    "schedule_notification_email",
    "send_digests",
    "send_notification_email",
    "update_job_alert",
    "update_preferences",
]
