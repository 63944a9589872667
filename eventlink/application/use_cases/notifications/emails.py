"""Email delivery for notifications, run after the response is sent."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from sqlalchemy.orm import Session

from eventlink.domain.entities import Notification, User
from eventlink.infrastructure import email as mailer
from eventlink.infrastructure.database import SessionLocal
from eventlink.infrastructure.repositories import (
    JobApplicationRepository,
    JobRepository,
    NotificationRepository,
    UserRepository,
)

from .preferences import (
    EMAIL_TYPE_APPLICATION_UPDATE,
    EMAIL_TYPE_JOB_ALERT,
    EMAIL_TYPE_JOB_UPDATE,
    EMAIL_TYPE_MESSAGE,
    EMAIL_TYPE_RATING_REQUEST,
    EMAIL_TYPE_SYSTEM,
    email_allowed,
)

logger = logging.getLogger(__name__)

# ``BackgroundTasks.add_task`` compatible scheduler.
Scheduler = Callable[..., Any]


def _metadata(notification: Notification) -> dict[str, Any]:
    if not notification.metadata:
        return {}
    try:
        payload = json.loads(notification.metadata)
    except (TypeError, ValueError):
        return {}
    return payload if isinstance(payload, dict) else {}


def _send_message_email(
    session: Session, user: User, notification: Notification, preview: str | None
) -> bool:
    metadata = _metadata(notification)
    sender = UserRepository(session).get(int(metadata.get("sender_id") or 0), include_deleted=True)
    return mailer.send_new_message_email(
        user.email,
        recipient_name=user.first_name,
        sender_name=sender.full_name if sender else "an EventLink member",
        preview=preview or notification.message,
        conversation_id=int(metadata.get("conversation_id") or 0),
    )


def _send_job_alert_email(session: Session, user: User, notification: Notification) -> bool:
    job = JobRepository(session).get(notification.related_entity_id or 0)
    if job is None:
        logger.info("Job %s no longer exists; skipping alert email", notification.related_entity_id)
        return False
    return mailer.send_job_alert_email(
        user.email,
        recipient_name=user.first_name,
        job_id=job.id,
        job_title=job.title,
        company=job.company,
        location=job.location,
        rate=job.rate,
    )


def _send_rating_request_email(session: Session, user: User, notification: Notification) -> bool:
    application = JobApplicationRepository(session).get(notification.related_entity_id or 0)
    if application is None:
        return False
    job = JobRepository(session).get(application.job_id)
    freelancer = UserRepository(session).get(application.freelancer_id, include_deleted=True)
    return mailer.send_rating_request_email(
        user.email,
        recipient_name=user.first_name,
        freelancer_name=freelancer.full_name if freelancer else "A freelancer",
        job_title=job.title if job else "a past job",
    )


def send_notification_email(
    session: Session,
    *,
    notification_id: int,
    email_type: str,
    preview: str | None = None,
) -> bool:
    """Email the recipient of ``notification_id`` when their preferences allow it."""

    notification = NotificationRepository(session).get(notification_id)
    if notification is None:
        return False
    user = UserRepository(session).get(notification.user_id)
    if user is None:
        return False
    if not email_allowed(session, user.id, email_type):
        logger.info("User %s opted out of %s emails", user.id, email_type)
        return False

    if email_type == EMAIL_TYPE_MESSAGE:
        return _send_message_email(session, user, notification, preview)
    if email_type == EMAIL_TYPE_JOB_ALERT:
        return _send_job_alert_email(session, user, notification)
    if email_type == EMAIL_TYPE_RATING_REQUEST:
        return _send_rating_request_email(session, user, notification)
    if email_type == EMAIL_TYPE_APPLICATION_UPDATE:
        return mailer.send_application_update_email(
            user.email,
            recipient_name=user.first_name,
            title=notification.title,
            message=notification.message,
            action_path=notification.action_url or "/dashboard?tab=applications",
        )
    if email_type == EMAIL_TYPE_JOB_UPDATE:
        return mailer.send_job_update_email(
            user.email,
            recipient_name=user.first_name,
            title=notification.title,
            message=notification.message,
            job_id=notification.related_entity_id or 0,
        )
    if email_type == EMAIL_TYPE_SYSTEM:
        return mailer.send_system_email(
            user.email,
            recipient_name=user.first_name,
            title=notification.title,
            message=notification.message,
            action_path=notification.action_url or "/dashboard",
        )
    raise ValueError(f"Unknown email type: {email_type}")


def deliver_notification_email(
    *, notification_id: int, email_type: str, preview: str | None = None
) -> None:
    """Background entry point using its own database session."""

    session = SessionLocal()
    try:
        send_notification_email(
            session, notification_id=notification_id, email_type=email_type, preview=preview
        )
    except Exception as exc:  # pragma: no cover - background processing guard
        logger.exception(
            "Error sending %s email for notification %s: %s", email_type, notification_id, exc
        )
    finally:
        session.close()


def schedule_notification_email(
    schedule: Scheduler | None,
    notification: Notification,
    email_type: str,
    **kwargs: Any,
) -> None:
    if schedule is None:
        return
    schedule(
        deliver_notification_email,
        notification_id=notification.id,
        email_type=email_type,
        **kwargs,
    )


__all__ = [
    "Scheduler",
    "deliver_notification_email",
    "schedule_notification_email",
    "send_notification_email",
]
