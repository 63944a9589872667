"""Endpoints for notifications, badge counts, email settings and job alerts."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from eventlink.application.use_cases.notifications import (
    create_notification as create_notification_uc,
    delete_job_alert as delete_job_alert_uc,
    delete_notification as delete_notification_uc,
    get_category_counts,
    get_job_alert as get_job_alert_uc,
    get_preferences as get_preferences_uc,
    get_unread_count,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read,
    mark_category_read as mark_category_read_uc,
    mark_notification_read,
    save_job_alert as save_job_alert_uc,
    update_job_alert as update_job_alert_uc,
    update_preferences as update_preferences_uc,
)
from eventlink.domain.entities import User
from eventlink.infrastructure.database import get_db
from eventlink.infrastructure.notifications import LiveBroadcaster
from eventlink.interfaces.api.dependencies import (
    get_broadcaster,
    get_current_user,
    require_admin,
    require_freelancer,
)
from eventlink.interfaces.api.routes_helpers import disable_caching, http_errors
from eventlink.interfaces.api.schemas import (
    CategoryCountsRead,
    JobAlertFilterRead,
    JobAlertFilterWrite,
    MarkedCountRead,
    NotificationCreate,
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
    NotificationRead,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationRead])
def list_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[NotificationRead]:
    """Return the caller's non-expired notifications, newest first."""

    notifications = list_notifications_uc(db, current_user.id)
    return [NotificationRead.model_validate(notification) for notification in notifications]


@router.get("/unread-count", response_model=UnreadCountRead)
def unread_count(
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UnreadCountRead:
    disable_caching(response)
    return UnreadCountRead(count=get_unread_count(db, current_user.id))


@router.get("/category-counts", response_model=CategoryCountsRead)
def category_counts(
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CategoryCountsRead:
    """Badge counts per category, identical to the pushed ``badge_counts_update``."""

    disable_caching(response)
    return CategoryCountsRead(**get_category_counts(db, current_user.id).to_dict())


@router.post("", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
    _: User = Depends(require_admin),
) -> NotificationRead:
    with http_errors():
        notification = create_notification_uc(db, broadcaster, **payload.model_dump())
    return NotificationRead.model_validate(notification)


@router.patch("/mark-all-read", response_model=MarkedCountRead)
def mark_all_read(
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
    current_user: User = Depends(get_current_user),
) -> MarkedCountRead:
    updated = mark_all_notifications_read(db, broadcaster, user_id=current_user.id)
    return MarkedCountRead(updated=updated)


@router.patch("/mark-category-read/{category}", response_model=MarkedCountRead)
def mark_category_read(
    category: str,
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
    current_user: User = Depends(get_current_user),
) -> MarkedCountRead:
    with http_errors():
        updated = mark_category_read_uc(
            db, broadcaster, user_id=current_user.id, category=category
        )
    return MarkedCountRead(updated=updated)


@router.get("/settings", response_model=NotificationPreferencesRead)
def read_settings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationPreferencesRead:
    return NotificationPreferencesRead.model_validate(get_preferences_uc(db, current_user.id))


@router.post("/settings", response_model=NotificationPreferencesRead)
def save_settings(
    payload: NotificationPreferencesUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationPreferencesRead:
    with http_errors():
        preferences = update_preferences_uc(
            db, current_user.id, payload.model_dump(exclude_unset=True)
        )
    return NotificationPreferencesRead.model_validate(preferences)


@router.get("/job-alerts", response_model=JobAlertFilterRead | None)
def read_job_alert(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_freelancer),
) -> JobAlertFilterRead | None:
    alert_filter = get_job_alert_uc(db, current_user.id)
    return JobAlertFilterRead.model_validate(alert_filter) if alert_filter else None


@router.post("/job-alerts", response_model=JobAlertFilterRead)
def save_job_alert(
    payload: JobAlertFilterWrite,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_freelancer),
) -> JobAlertFilterRead:
    """Create the caller's alert filter or replace its criteria."""

    with http_errors():
        alert_filter = save_job_alert_uc(
            db, current_user.id, payload.model_dump(exclude_unset=True)
        )
    return JobAlertFilterRead.model_validate(alert_filter)


@router.patch("/job-alerts/{filter_id}", response_model=JobAlertFilterRead)
def update_job_alert(
    filter_id: int,
    payload: JobAlertFilterWrite,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_freelancer),
) -> JobAlertFilterRead:
    with http_errors():
        alert_filter = update_job_alert_uc(
            db, current_user.id, filter_id, payload.model_dump(exclude_unset=True)
        )
    return JobAlertFilterRead.model_validate(alert_filter)


@router.delete("/job-alerts/{filter_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job_alert(
    filter_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_freelancer),
) -> None:
    with http_errors():
        delete_job_alert_uc(db, current_user.id, filter_id)


@router.patch("/{notification_id}/read", response_model=NotificationRead)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
    current_user: User = Depends(get_current_user),
) -> NotificationRead:
    """Mark one notification read; repeating the call is harmless."""

    with http_errors():
        notification = mark_notification_read(
            db, broadcaster, actor=current_user, notification_id=notification_id
        )
    return NotificationRead.model_validate(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
    current_user: User = Depends(get_current_user),
) -> None:
    with http_errors():
        delete_notification_uc(
            db, broadcaster, actor=current_user, notification_id=notification_id
        )
