"""Public feedback and contact-form endpoints."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eventlink.application.use_cases.feedback import (
    submit_contact_message as submit_contact_message_uc,
    submit_feedback as submit_feedback_uc,
)
from eventlink.domain.entities import User
from eventlink.infrastructure.database import get_db
from eventlink.infrastructure.notifications import LiveBroadcaster
from eventlink.interfaces.api.dependencies import get_broadcaster, get_optional_user
from eventlink.interfaces.api.routes_helpers import http_errors
from eventlink.interfaces.api.schemas import (
    ContactMessageCreate,
    ContactMessageRead,
    FeedbackCreate,
    FeedbackRead,
)

router = APIRouter(tags=["feedback"])
logger = logging.getLogger(__name__)


@router.post("/feedback", response_model=FeedbackRead, status_code=status.HTTP_201_CREATED)
def submit_feedback(
    payload: FeedbackCreate,
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
    current_user: User | None = Depends(get_optional_user),
) -> FeedbackRead:
    """Record feedback from signed-in or anonymous visitors and alert admins."""

    with http_errors():
        feedback = submit_feedback_uc(
            db,
            broadcaster,
            user=current_user,
            feedback_type=payload.feedback_type,
            message=payload.message,
            page_url=payload.page_url,
            source=payload.source,
            user_email=payload.user_email,
            user_name=payload.user_name,
        )
    logger.info("Feedback %s submitted (%s)", feedback.id, feedback.feedback_type)
    return FeedbackRead.model_validate(feedback)


@router.post("/contact", response_model=ContactMessageRead, status_code=status.HTTP_201_CREATED)
def submit_contact_message(
    payload: ContactMessageCreate,
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
) -> ContactMessageRead:
    with http_errors():
        contact = submit_contact_message_uc(
            db,
            broadcaster,
            name=payload.name,
            email=payload.email,
            subject=payload.subject,
            message=payload.message,
        )
    return ContactMessageRead.model_validate(contact)
