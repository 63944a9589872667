"""Daily and weekly email digests of unread notifications."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from eventlink.domain.entities import DIGEST_MODE_DAILY, DIGEST_MODE_WEEKLY
from eventlink.infrastructure import email as mailer
from eventlink.infrastructure.repositories import (
    NotificationPreferencesRepository,
    NotificationRepository,
    UserRepository,
)
from eventlink.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

DIGEST_WINDOWS = {
    DIGEST_MODE_DAILY: timedelta(days=1),
    DIGEST_MODE_WEEKLY: timedelta(days=7),
}


def send_digests(session: Session, digest_mode: str, *, now: datetime | None = None) -> int:
    """Email each user on ``digest_mode`` their unread notifications of the period.

    Returns the number of digests delivered.
    """

    if digest_mode not in DIGEST_WINDOWS:
        raise ValueError("Digests are only sent for daily or weekly modes")

    since = (now or now_in_app_timezone()) - DIGEST_WINDOWS[digest_mode]
    users = UserRepository(session)
    notifications = NotificationRepository(session)
    delivered = 0

    for user_id in NotificationPreferencesRepository(session).list_user_ids_by_digest_mode(
        digest_mode
    ):
        user = users.get(user_id)
        if user is None:
            continue
        pending = notifications.list_unread_since(user_id, since)
        if not pending:
            continue
        items = [(notification.title, notification.message) for notification in pending]
        if mailer.send_digest_email(
            user.email,
            recipient_name=user.first_name,
            period_label=digest_mode,
            items=items,
        ):
            delivered += 1
        else:
            logger.warning("Digest email for user %s was not delivered", user_id)

    return delivered


__all__ = ["DIGEST_WINDOWS", "send_digests"]
