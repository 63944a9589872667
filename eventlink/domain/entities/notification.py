"""Domain entities for user notifications and derived badge counts."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping

NOTIFICATION_TYPE_NEW_MESSAGE = "new_message"
NOTIFICATION_TYPE_APPLICATION_UPDATE = "application_update"
NOTIFICATION_TYPE_JOB_UPDATE = "job_update"
NOTIFICATION_TYPE_PROFILE_VIEW = "profile_view"
NOTIFICATION_TYPE_RATING_RECEIVED = "rating_received"
NOTIFICATION_TYPE_RATING_REQUEST = "rating_request"
NOTIFICATION_TYPE_SYSTEM = "system"
NOTIFICATION_TYPE_FEEDBACK = "feedback"
NOTIFICATION_TYPE_CONTACT_MESSAGE = "contact_message"

NOTIFICATION_TYPES = (
    NOTIFICATION_TYPE_NEW_MESSAGE,
    NOTIFICATION_TYPE_APPLICATION_UPDATE,
    NOTIFICATION_TYPE_JOB_UPDATE,
    NOTIFICATION_TYPE_PROFILE_VIEW,
    NOTIFICATION_TYPE_RATING_RECEIVED,
    NOTIFICATION_TYPE_RATING_REQUEST,
    NOTIFICATION_TYPE_SYSTEM,
    NOTIFICATION_TYPE_FEEDBACK,
    NOTIFICATION_TYPE_CONTACT_MESSAGE,
)

NOTIFICATION_PRIORITIES = ("low", "normal", "high", "urgent")
RELATED_ENTITY_TYPES = (
    "job",
    "application",
    "message",
    "profile",
    "rating",
    "feedback",
    "contact",
)

CATEGORY_MESSAGES = "messages"
CATEGORY_APPLICATIONS = "applications"
CATEGORY_JOBS = "jobs"
CATEGORY_RATINGS = "ratings"
CATEGORY_FEEDBACK = "feedback"
CATEGORY_CONTACT_MESSAGES = "contact_messages"

NOTIFICATION_CATEGORIES = (
    CATEGORY_MESSAGES,
    CATEGORY_APPLICATIONS,
    CATEGORY_JOBS,
    CATEGORY_RATINGS,
    CATEGORY_FEEDBACK,
    CATEGORY_CONTACT_MESSAGES,
)

# profile_view and system notifications belong to no badge category.
_TYPE_TO_CATEGORY: Mapping[str, str] = {
    NOTIFICATION_TYPE_NEW_MESSAGE: CATEGORY_MESSAGES,
    NOTIFICATION_TYPE_APPLICATION_UPDATE: CATEGORY_APPLICATIONS,
    NOTIFICATION_TYPE_JOB_UPDATE: CATEGORY_JOBS,
    NOTIFICATION_TYPE_RATING_RECEIVED: CATEGORY_RATINGS,
    NOTIFICATION_TYPE_RATING_REQUEST: CATEGORY_RATINGS,
    NOTIFICATION_TYPE_FEEDBACK: CATEGORY_FEEDBACK,
    NOTIFICATION_TYPE_CONTACT_MESSAGE: CATEGORY_CONTACT_MESSAGES,
}


def category_for_type(notification_type: str) -> str | None:
    """Return the badge category for ``notification_type`` or ``None``."""

    return _TYPE_TO_CATEGORY.get(notification_type)


def types_for_category(category: str) -> tuple[str, ...]:
    """Return every notification type that folds into ``category``."""

    if category not in NOTIFICATION_CATEGORIES:
        raise ValueError("Invalid category")
    return tuple(
        notification_type
        for notification_type, mapped in _TYPE_TO_CATEGORY.items()
        if mapped == category
    )


@dataclass
class Notification:
    """Message addressed to a single user."""

    id: int | None
    user_id: int
    type: str
    title: str
    message: str
    is_read: bool = False
    priority: str = "normal"
    related_entity_type: str | None = None
    related_entity_id: int | None = None
    action_url: str | None = None
    metadata: str | None = None
    expires_at: datetime | None = None
    created_at: datetime | None = None

    @property
    def category(self) -> str | None:
        return category_for_type(self.type)


@dataclass(frozen=True)
class BadgeCounts:
    """Unread notifications per category. ``total`` is always the sum."""

    messages: int = 0
    applications: int = 0
    jobs: int = 0
    ratings: int = 0
    feedback: int = 0
    contact_messages: int = 0

    @property
    def total(self) -> int:
        return (
            self.messages
            + self.applications
            + self.jobs
            + self.ratings
            + self.feedback
            + self.contact_messages
        )

    @classmethod
    def from_type_counts(cls, rows: Iterable[tuple[str, int]]) -> "BadgeCounts":
        """Fold ``(notification_type, unread_count)`` pairs into categories."""

        totals = {category: 0 for category in NOTIFICATION_CATEGORIES}
        for notification_type, count in rows:
            category = category_for_type(notification_type)
            if category is None:
                continue
            totals[category] += int(count)
        return cls(**totals)

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["total"] = self.total
        return payload


__all__ = [
    "BadgeCounts",
    "CATEGORY_APPLICATIONS",
    "CATEGORY_CONTACT_MESSAGES",
    "CATEGORY_FEEDBACK",
    "CATEGORY_JOBS",
    "CATEGORY_MESSAGES",
    "CATEGORY_RATINGS",
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
    "RELATED_ENTITY_TYPES",
    "category_for_type",
    "types_for_category",
]
