"""Use cases for job postings and the notifications they trigger."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy.orm import Session

from eventlink.domain.entities import (
    ACTIVE_APPLICATION_STATUSES,
    APPLICATION_STATUS_HIRED,
    JOB_STATUSES,
    JOB_STATUS_ACTIVE,
    JOB_TYPES,
    NOTIFICATION_TYPE_JOB_UPDATE,
    Job,
    User,
)
from eventlink.infrastructure.notifications import LiveBroadcaster
from eventlink.infrastructure.repositories import JobApplicationRepository, JobRepository

from .notifications import (
    EMAIL_TYPE_JOB_ALERT,
    EMAIL_TYPE_JOB_UPDATE,
    Scheduler,
    find_matching_freelancer_ids,
    notify_users,
    schedule_notification_email,
)

_EDITABLE_FIELDS = (
    "title",
    "company",
    "location",
    "type",
    "rate",
    "description",
    "event_date",
    "skills",
    "status",
)
_REQUIRED_TEXT_FIELDS = ("title", "company", "location", "rate", "description")


def _validate(job: Job) -> Job:
    for field_name in _REQUIRED_TEXT_FIELDS:
        if not str(getattr(job, field_name) or "").strip():
            raise ValueError(f"{field_name.replace('_', ' ').capitalize()} is required")
    if job.type not in JOB_TYPES:
        raise ValueError("Invalid job type")
    if job.status not in JOB_STATUSES:
        raise ValueError("Invalid job status")
    job.skills = [skill.strip() for skill in job.skills or [] if skill.strip()]
    return job


def _get_managed_job(session: Session, actor: User, job_id: int) -> Job:
    job = JobRepository(session).get(job_id)
    if job is None:
        raise LookupError("Job not found")
    if job.recruiter_id != actor.id and not actor.is_admin():
        raise PermissionError("You can only manage your own jobs")
    return job


def list_jobs(
    session: Session,
    *,
    status: str | None = None,
    keyword: str | None = None,
    location: str | None = None,
    recruiter_id: int | None = None,
    skip: int = 0,
    limit: int = 100,
) -> Sequence[Job]:
    if status is not None and status not in JOB_STATUSES:
        raise ValueError("Invalid job status")
    return JobRepository(session).list(
        status=status,
        keyword=keyword,
        location=location,
        recruiter_id=recruiter_id,
        skip=skip,
        limit=limit,
    )


def get_job(session: Session, job_id: int) -> Job:
    job = JobRepository(session).get(job_id)
    if job is None:
        raise LookupError("Job not found")
    return job


def create_job(
    session: Session,
    broadcaster: LiveBroadcaster,
    *,
    recruiter: User,
    fields: dict[str, Any],
    schedule: Scheduler | None = None,
) -> Job:
    """Publish a job and alert freelancers whose saved filters match it."""

    if not (recruiter.is_recruiter() or recruiter.is_admin()):
        raise PermissionError("Only recruiters can post jobs")

    job = Job(
        id=None,
        recruiter_id=recruiter.id,
        title=fields.get("title") or "",
        company=fields.get("company") or "",
        location=fields.get("location") or "",
        type=fields.get("type") or "",
        rate=fields.get("rate") or "",
        description=fields.get("description") or "",
        event_date=fields.get("event_date"),
        skills=list(fields.get("skills") or []),
        status=fields.get("status") or "active",
    )
    job = JobRepository(session).create(_validate(job))

    if job.status == JOB_STATUS_ACTIVE:
        alerted = notify_users(
            session,
            broadcaster,
            find_matching_freelancer_ids(session, job),
            type=NOTIFICATION_TYPE_JOB_UPDATE,
            title="New Job Match",
            message=f"A new job matching your alerts was posted: {job.title} at {job.company}",
            related_entity_type="job",
            related_entity_id=job.id,
            action_url=f"/jobs/{job.id}",
            metadata={"job_id": job.id, "job_alert": True},
        )
        for notification in alerted:
            schedule_notification_email(schedule, notification, EMAIL_TYPE_JOB_ALERT)
    return job


def update_job(
    session: Session,
    broadcaster: LiveBroadcaster,
    *,
    actor: User,
    job_id: int,
    changes: dict[str, Any],
    schedule: Scheduler | None = None,
) -> Job:
    """Update a job and tell applicants still in the running."""

    job = _get_managed_job(session, actor, job_id)
    for field_name in _EDITABLE_FIELDS:
        if field_name in changes:
            setattr(job, field_name, changes[field_name])
    job = JobRepository(session).update(_validate(job))

    applicants = JobApplicationRepository(session).list_for_job(
        job.id, statuses=ACTIVE_APPLICATION_STATUSES
    )
    notified = notify_users(
        session,
        broadcaster,
        [application.freelancer_id for application in applicants],
        type=NOTIFICATION_TYPE_JOB_UPDATE,
        title="Job Updated",
        message=f'The job "{job.title}" you applied for has been updated.',
        related_entity_type="job",
        related_entity_id=job.id,
        action_url=f"/jobs/{job.id}",
        metadata={"job_id": job.id},
    )
    for notification in notified:
        schedule_notification_email(schedule, notification, EMAIL_TYPE_JOB_UPDATE)
    return job


def delete_job(
    session: Session,
    broadcaster: LiveBroadcaster,
    *,
    actor: User,
    job_id: int,
    schedule: Scheduler | None = None,
) -> None:
    """Remove a job; hired freelancers are told the gig is cancelled."""

    job = _get_managed_job(session, actor, job_id)
    hired = JobApplicationRepository(session).list_for_job(
        job.id, statuses=(APPLICATION_STATUS_HIRED,)
    )
    JobRepository(session).delete(job.id)

    notified = notify_users(
        session,
        broadcaster,
        [application.freelancer_id for application in hired],
        type=NOTIFICATION_TYPE_JOB_UPDATE,
        title="Job Cancelled",
        message=f'The job "{job.title}" at {job.company} you were hired for has been cancelled.',
        priority="high",
        related_entity_type="job",
        related_entity_id=job.id,
        action_url="/dashboard?tab=applications",
        metadata={"job_id": job.id, "cancelled": True},
    )
    for notification in notified:
        schedule_notification_email(schedule, notification, EMAIL_TYPE_JOB_UPDATE)


__all__ = ["create_job", "delete_job", "get_job", "list_jobs", "update_job"]
