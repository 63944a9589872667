"""Use cases for per-user email notification preferences."""

from __future__ import annotations

import re
from typing import Any, Final

from sqlalchemy.orm import Session

from eventlink.domain.entities import (
    DIGEST_MODES,
    DIGEST_MODE_INSTANT,
    EMAIL_PREFERENCE_FIELDS,
    NotificationPreferences,
)
from eventlink.infrastructure.repositories import NotificationPreferencesRepository

EMAIL_TYPE_MESSAGE = "message"
EMAIL_TYPE_APPLICATION_UPDATE = "application_update"
EMAIL_TYPE_JOB_UPDATE = "job_update"
EMAIL_TYPE_JOB_ALERT = "job_alert"
EMAIL_TYPE_RATING_REQUEST = "rating_request"
EMAIL_TYPE_SYSTEM = "system"

EMAIL_TYPE_PREFERENCES: Final[dict[str, str]] = {
    EMAIL_TYPE_MESSAGE: "email_messages",
    EMAIL_TYPE_APPLICATION_UPDATE: "email_application_updates",
    EMAIL_TYPE_JOB_UPDATE: "email_job_updates",
    EMAIL_TYPE_JOB_ALERT: "email_job_alerts",
    EMAIL_TYPE_RATING_REQUEST: "email_rating_requests",
    EMAIL_TYPE_SYSTEM: "email_system_updates",
}

_DIGEST_TIME_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(?:[01]\d|2[0-3]):[0-5]\d$")


def get_preferences(session: Session, user_id: int) -> NotificationPreferences:
    """Return the user's preferences, creating the defaults on first access."""

    repository = NotificationPreferencesRepository(session)
    preferences = repository.get_by_user(user_id)
    if preferences is None:
        preferences = repository.save(NotificationPreferences(id=None, user_id=user_id))
    return preferences


def update_preferences(
    session: Session, user_id: int, changes: dict[str, Any]
) -> NotificationPreferences:
    preferences = get_preferences(session, user_id)
    for field_name in EMAIL_PREFERENCE_FIELDS:
        if changes.get(field_name) is not None:
            setattr(preferences, field_name, bool(changes[field_name]))

    digest_mode = changes.get("digest_mode")
    if digest_mode is not None:
        if digest_mode not in DIGEST_MODES:
            raise ValueError("Invalid digest mode")
        preferences.digest_mode = digest_mode

    digest_time = changes.get("digest_time")
    if digest_time is not None:
        if not _DIGEST_TIME_PATTERN.match(digest_time):
            raise ValueError("Digest time must use the HH:MM format")
        preferences.digest_time = digest_time

    return NotificationPreferencesRepository(session).save(preferences)


def email_allowed(session: Session, user_id: int, email_type: str) -> bool:
    """Return whether an immediate email of ``email_type`` may be sent.

    Users on a daily or weekly digest receive their updates in the digest
    instead of one email per event.
    """

    preference_field = EMAIL_TYPE_PREFERENCES.get(email_type)
    if preference_field is None:
        raise ValueError(f"Unknown email type: {email_type}")
    preferences = get_preferences(session, user_id)
    if preferences.digest_mode != DIGEST_MODE_INSTANT:
        return False
    return preferences.allows(preference_field)


__all__ = [
    "EMAIL_TYPE_APPLICATION_UPDATE",
    "EMAIL_TYPE_JOB_ALERT",
    "EMAIL_TYPE_JOB_UPDATE",
    "EMAIL_TYPE_MESSAGE",
    "EMAIL_TYPE_PREFERENCES",
    "EMAIL_TYPE_RATING_REQUEST",
    "EMAIL_TYPE_SYSTEM",
    "email_allowed",
    "get_preferences",
    "update_preferences",
]
