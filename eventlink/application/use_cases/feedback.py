"""Use cases for product feedback and the public contact form."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from eventlink.domain.entities import (
    FEEDBACK_STATUSES,
    FEEDBACK_TYPES,
    NOTIFICATION_TYPE_CONTACT_MESSAGE,
    NOTIFICATION_TYPE_FEEDBACK,
    NOTIFICATION_TYPE_SYSTEM,
    ContactMessage,
    Feedback,
    User,
)
from eventlink.infrastructure.notifications import LiveBroadcaster
from eventlink.infrastructure.repositories import (
    ContactMessageRepository,
    FeedbackRepository,
    UserRepository,
)
from eventlink.utils import now_in_app_naive_datetime

from .notifications import (
    EMAIL_TYPE_SYSTEM,
    Scheduler,
    create_notification,
    notify_admins,
    schedule_notification_email,
)


def submit_feedback(
    session: Session,
    broadcaster: LiveBroadcaster,
    *,
    user: User | None,
    feedback_type: str,
    message: str,
    page_url: str | None = None,
    source: str = "header",
    user_email: str | None = None,
    user_name: str | None = None,
) -> Feedback:
    if feedback_type not in FEEDBACK_TYPES:
        raise ValueError("Invalid feedback type")
    if not (message or "").strip():
        raise ValueError("Feedback message is required")

    feedback = FeedbackRepository(session).create(
        Feedback(
            id=None,
            feedback_type=feedback_type,
            message=message.strip(),
            user_id=user.id if user else None,
            page_url=page_url,
            source=source or "header",
            user_email=user.email if user else user_email,
            user_name=user.full_name if user else user_name,
        )
    )

    author = feedback.user_name or feedback.user_email or "Anonymous user"
    notify_admins(
        session,
        broadcaster,
        type=NOTIFICATION_TYPE_FEEDBACK,
        title="New Feedback",
        message=f"{author} reported: {feedback.feedback_type}",
        related_entity_type="feedback",
        related_entity_id=feedback.id,
        action_url="/admin?tab=feedback",
        metadata={"feedback_id": feedback.id, "feedback_type": feedback.feedback_type},
    )
    return feedback


def list_feedback(session: Session, *, status: str | None = None) -> Sequence[Feedback]:
    if status is not None and status not in FEEDBACK_STATUSES:
        raise ValueError("Invalid feedback status")
    return FeedbackRepository(session).list(status=status)


def respond_to_feedback(
    session: Session,
    broadcaster: LiveBroadcaster,
    *,
    admin: User,
    feedback_id: int,
    response: str,
    status: str = "resolved",
    schedule: Scheduler | None = None,
) -> Feedback:
    """Store the admin response and tell the author when they have an account."""

    if status not in FEEDBACK_STATUSES:
        raise ValueError("Invalid feedback status")
    if not (response or "").strip():
        raise ValueError("Response is required")

    repository = FeedbackRepository(session)
    feedback = repository.get(feedback_id)
    if feedback is None:
        raise LookupError("Feedback not found")
    feedback.admin_response = response.strip()
    feedback.admin_user_id = admin.id
    feedback.status = status
    if status in ("resolved", "closed"):
        feedback.resolved_at = now_in_app_naive_datetime()
    feedback = repository.update(feedback)

    if feedback.user_id and UserRepository(session).get(feedback.user_id):
        notification = create_notification(
            session,
            broadcaster,
            user_id=feedback.user_id,
            type=NOTIFICATION_TYPE_SYSTEM,
            title="Feedback Response",
            message=feedback.admin_response,
            related_entity_type="feedback",
            related_entity_id=feedback.id,
            action_url="/dashboard",
        )
        schedule_notification_email(schedule, notification, EMAIL_TYPE_SYSTEM)
    return feedback


def submit_contact_message(
    session: Session,
    broadcaster: LiveBroadcaster,
    *,
    name: str,
    email: str,
    subject: str,
    message: str,
) -> ContactMessage:
    for label, value in (("Name", name), ("Subject", subject), ("Message", message)):
        if not (value or "").strip():
            raise ValueError(f"{label} is required")

    contact = ContactMessageRepository(session).create(
        ContactMessage(
            id=None,
            name=name.strip(),
            email=email.strip(),
            subject=subject.strip(),
            message=message.strip(),
        )
    )
    notify_admins(
        session,
        broadcaster,
        type=NOTIFICATION_TYPE_CONTACT_MESSAGE,
        title="New Contact Message",
        message=f"{contact.name} ({contact.email}): {contact.subject}",
        related_entity_type="contact",
        related_entity_id=contact.id,
        action_url="/admin?tab=contact",
        metadata={"contact_message_id": contact.id},
    )
    return contact


def list_contact_messages(session: Session) -> Sequence[ContactMessage]:
    return ContactMessageRepository(session).list()


__all__ = [
    "list_contact_messages",
    "list_feedback",
    "respond_to_feedback",
    "submit_contact_message",
    "submit_feedback",
]
