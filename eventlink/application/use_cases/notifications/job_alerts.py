"""Use cases for freelancer job alert filters."""

from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy.orm import Session

from eventlink.domain.entities import Job, JobAlertFilter
from eventlink.infrastructure.repositories import JobAlertFilterRepository, UserRepository

_LIST_FIELDS = ("skills", "locations", "keywords", "job_types")
_NOT_FOUND = "Job alert filter not found or access denied"


def _clean_list(values: Any) -> list[str]:
    if values is None:
        return []
    return [str(value).strip() for value in values if str(value).strip()]


def _apply_changes(alert_filter: JobAlertFilter, changes: dict[str, Any]) -> JobAlertFilter:
    for field_name in _LIST_FIELDS:
        if field_name in changes and changes[field_name] is not None:
            setattr(alert_filter, field_name, _clean_list(changes[field_name]))
    if "date_from" in changes:
        alert_filter.date_from = changes["date_from"]
    if "date_to" in changes:
        alert_filter.date_to = changes["date_to"]
    if changes.get("is_active") is not None:
        alert_filter.is_active = bool(changes["is_active"])

    date_from: date | None = alert_filter.date_from
    date_to: date | None = alert_filter.date_to
    if date_from and date_to and date_from > date_to:
        raise ValueError("date_from must be on or before date_to")
    return alert_filter


def get_job_alert(session: Session, user_id: int) -> JobAlertFilter | None:
    filters = JobAlertFilterRepository(session).list_for_user(user_id)
    return filters[0] if filters else None


def save_job_alert(session: Session, user_id: int, changes: dict[str, Any]) -> JobAlertFilter:
    """Create the user's alert filter or update the existing one."""

    alert_filter = get_job_alert(session, user_id) or JobAlertFilter(id=None, user_id=user_id)
    return JobAlertFilterRepository(session).save(_apply_changes(alert_filter, changes))


def update_job_alert(
    session: Session, user_id: int, filter_id: int, changes: dict[str, Any]
) -> JobAlertFilter:
    repository = JobAlertFilterRepository(session)
    alert_filter = repository.get(filter_id)
    if alert_filter is None or alert_filter.user_id != user_id:
        raise LookupError(_NOT_FOUND)
    return repository.save(_apply_changes(alert_filter, changes))


def delete_job_alert(session: Session, user_id: int, filter_id: int) -> None:
    repository = JobAlertFilterRepository(session)
    alert_filter = repository.get(filter_id)
    if alert_filter is None or alert_filter.user_id != user_id:
        raise LookupError(_NOT_FOUND)
    repository.delete(filter_id)


def find_matching_freelancer_ids(session: Session, job: Job) -> list[int]:
    """Return freelancers whose active alert matches ``job``, without duplicates."""

    matches = [
        alert_filter.user_id
        for alert_filter in JobAlertFilterRepository(session).list_active()
        if alert_filter.user_id != job.recruiter_id and alert_filter.matches(job)
    ]
    users = UserRepository(session).get_map_by_ids(matches)
    return [
        user_id
        for user_id in dict.fromkeys(matches)
        if user_id in users and users[user_id].is_freelancer()
    ]


__all__ = [
    "delete_job_alert",
    "find_matching_freelancer_ids",
    "get_job_alert",
    "save_job_alert",
    "update_job_alert",
]
