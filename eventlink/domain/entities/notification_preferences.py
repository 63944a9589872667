"""Domain entity for per-user email notification preferences."""

from __future__ import annotations

from dataclasses import dataclass

DIGEST_MODE_INSTANT = "instant"
DIGEST_MODE_DAILY = "daily"
DIGEST_MODE_WEEKLY = "weekly"
DIGEST_MODES = (DIGEST_MODE_INSTANT, DIGEST_MODE_DAILY, DIGEST_MODE_WEEKLY)

EMAIL_PREFERENCE_FIELDS = (
    "email_messages",
    "email_application_updates",
    "email_job_updates",
    "email_job_alerts",
    "email_rating_requests",
    "email_system_updates",
)


@dataclass
class NotificationPreferences:
    id: int | None
    user_id: int
    email_messages: bool = True
    email_application_updates: bool = True
    email_job_updates: bool = True
    email_job_alerts: bool = True
    email_rating_requests: bool = True
    email_system_updates: bool = True
    digest_mode: str = DIGEST_MODE_INSTANT
    digest_time: str = "09:00"

    def allows(self, preference_field: str) -> bool:
        """Return whether the email channel named ``preference_field`` is enabled."""

        return bool(getattr(self, preference_field, True))


__all__ = [
    "DIGEST_MODES",
    "DIGEST_MODE_DAILY",
    "DIGEST_MODE_INSTANT",
    "DIGEST_MODE_WEEKLY",
    "EMAIL_PREFERENCE_FIELDS",
    "NotificationPreferences",
]
