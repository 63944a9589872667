"""Administrator dashboard endpoints."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from eventlink.application.use_cases.admin import get_dashboard_stats
from eventlink.application.use_cases.feedback import (
    list_contact_messages,
    list_feedback as list_feedback_uc,
    respond_to_feedback as respond_to_feedback_uc,
)
from eventlink.application.use_cases.notifications import purge_expired_notifications
from eventlink.application.use_cases.users import (
    change_user_role as change_user_role_uc,
    delete_user as delete_user_uc,
    list_users as list_users_uc,
)
from eventlink.domain.entities import User
from eventlink.infrastructure.database import get_db
from eventlink.infrastructure.notifications import LiveBroadcaster
from eventlink.interfaces.api.dependencies import get_broadcaster, require_admin
from eventlink.interfaces.api.routes_helpers import http_errors
from eventlink.interfaces.api.schemas import (
    ContactMessageRead,
    DashboardStatsRead,
    FeedbackRead,
    FeedbackResponseUpdate,
    PurgeResultRead,
    RoleUpdate,
    UserRead,
)

router = APIRouter(prefix="/admin", tags=["admin"])
logger = logging.getLogger(__name__)


@router.get("/stats", response_model=DashboardStatsRead)
def read_stats(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> DashboardStatsRead:
    stats = get_dashboard_stats(db)
    return DashboardStatsRead(
        total_users=stats.total_users,
        users_by_role=stats.users_by_role,
        total_jobs=stats.total_jobs,
        jobs_by_status=stats.jobs_by_status,
        total_applications=stats.total_applications,
        feedback_by_status=stats.feedback_by_status,
        pending_contact_messages=stats.pending_contact_messages,
    )


@router.get("/users", response_model=list[UserRead])
def list_users(
    role: str | None = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[UserRead]:
    return [UserRead.model_validate(user) for user in list_users_uc(db, skip=skip, limit=limit, role=role)]


@router.patch("/users/{user_id}/role", response_model=UserRead)
def change_user_role(
    user_id: int,
    payload: RoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> UserRead:
    with http_errors():
        user = change_user_role_uc(db, user_id=user_id, role=payload.role)
    logger.info("Admin %s set role of user %s to %s", current_user.id, user_id, user.role)
    return UserRead.model_validate(user)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> None:
    with http_errors():
        delete_user_uc(db, user_id)
    logger.info("Admin %s deleted user %s", current_user.id, user_id)


@router.get("/feedback", response_model=list[FeedbackRead])
def list_feedback(
    status_filter: str | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[FeedbackRead]:
    with http_errors():
        items = list_feedback_uc(db, status=status_filter)
    return [FeedbackRead.model_validate(item) for item in items]


@router.patch("/feedback/{feedback_id}/respond", response_model=FeedbackRead)
def respond_to_feedback(
    feedback_id: int,
    payload: FeedbackResponseUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
    current_user: User = Depends(require_admin),
) -> FeedbackRead:
    with http_errors():
        feedback = respond_to_feedback_uc(
            db,
            broadcaster,
            admin=current_user,
            feedback_id=feedback_id,
            response=payload.response,
            status=payload.status,
            schedule=background_tasks.add_task,
        )
    return FeedbackRead.model_validate(feedback)


@router.get("/contact-messages", response_model=list[ContactMessageRead])
def read_contact_messages(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[ContactMessageRead]:
    return [ContactMessageRead.model_validate(item) for item in list_contact_messages(db)]


@router.post(
    "/notifications/purge-expired",
    response_model=PurgeResultRead,
    status_code=status.HTTP_200_OK,
)
def purge_expired(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> PurgeResultRead:
    return PurgeResultRead(deleted=purge_expired_notifications(db))
