"""Use cases for job applications and their status workflow."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eventlink.domain.entities import (
    APPLICATION_STATUSES,
    APPLICATION_STATUS_APPLIED,
    APPLICATION_STATUS_HIRED,
    APPLICATION_STATUS_REJECTED,
    APPLICATION_STATUS_REVIEWED,
    APPLICATION_STATUS_SHORTLISTED,
    JOB_STATUS_ACTIVE,
    NOTIFICATION_TYPE_APPLICATION_UPDATE,
    Job,
    JobApplication,
    User,
)
from eventlink.domain.exceptions import ConflictError
from eventlink.infrastructure.notifications import LiveBroadcaster
from eventlink.infrastructure.repositories import JobApplicationRepository, JobRepository

from .notifications import (
    EMAIL_TYPE_APPLICATION_UPDATE,
    Scheduler,
    create_notification,
    schedule_notification_email,
)

_STATUS_MESSAGES = {
    APPLICATION_STATUS_APPLIED: 'Your application for "{title}" is under consideration again.',
    APPLICATION_STATUS_REVIEWED: 'Your application for "{title}" has been reviewed.',
    APPLICATION_STATUS_SHORTLISTED: 'Great news! You have been shortlisted for "{title}".',
    APPLICATION_STATUS_REJECTED: 'Your application for "{title}" was not successful this time.',
    APPLICATION_STATUS_HIRED: 'Congratulations! You have been hired for "{title}".',
}
_HIGH_PRIORITY_STATUSES = (APPLICATION_STATUS_SHORTLISTED, APPLICATION_STATUS_HIRED)


def _get_application_with_job(
    session: Session, application_id: int
) -> tuple[JobApplication, Job]:
    application = JobApplicationRepository(session).get(application_id)
    if application is None:
        raise LookupError("Application not found")
    job = JobRepository(session).get(application.job_id)
    if job is None:
        raise LookupError("Job not found")
    return application, job


def _with_jobs(
    session: Session, applications: Sequence[JobApplication]
) -> list[tuple[JobApplication, Job | None]]:
    jobs = JobRepository(session)
    cache: dict[int, Job | None] = {}
    pairs = []
    for application in applications:
        if application.job_id not in cache:
            cache[application.job_id] = jobs.get(application.job_id)
        pairs.append((application, cache[application.job_id]))
    return pairs


def apply_to_job(
    session: Session,
    broadcaster: LiveBroadcaster,
    *,
    freelancer: User,
    job_id: int,
    cover_letter: str | None = None,
    schedule: Scheduler | None = None,
) -> JobApplication:
    if not freelancer.is_freelancer():
        raise PermissionError("Only freelancers can apply to jobs")
    job = JobRepository(session).get(job_id)
    if job is None:
        raise LookupError("Job not found")
    if job.status != JOB_STATUS_ACTIVE:
        raise ValueError("This job is no longer accepting applications")

    repository = JobApplicationRepository(session)
    if repository.get_by_job_and_freelancer(job_id=job.id, freelancer_id=freelancer.id):
        raise ConflictError("You have already applied to this job")
    try:
        application = repository.create(
            JobApplication(
                id=None,
                job_id=job.id,
                freelancer_id=freelancer.id,
                cover_letter=(cover_letter or "").strip() or None,
            )
        )
    except IntegrityError as exc:
        session.rollback()
        raise ConflictError("You have already applied to this job") from exc

    notification = create_notification(
        session,
        broadcaster,
        user_id=job.recruiter_id,
        type=NOTIFICATION_TYPE_APPLICATION_UPDATE,
        title="New Job Application",
        message=f'{freelancer.full_name} applied for "{job.title}".',
        related_entity_type="application",
        related_entity_id=application.id,
        action_url="/dashboard?tab=applications",
        metadata={"job_id": job.id, "application_id": application.id},
    )
    schedule_notification_email(schedule, notification, EMAIL_TYPE_APPLICATION_UPDATE)
    return application


def list_freelancer_applications(
    session: Session, freelancer: User
) -> list[tuple[JobApplication, Job | None]]:
    return _with_jobs(session, JobApplicationRepository(session).list_for_freelancer(freelancer.id))


def list_recruiter_applications(
    session: Session, recruiter: User
) -> list[tuple[JobApplication, Job | None]]:
    return _with_jobs(session, JobApplicationRepository(session).list_for_recruiter(recruiter.id))


def list_job_applications(
    session: Session, *, actor: User, job_id: int
) -> Sequence[JobApplication]:
    job = JobRepository(session).get(job_id)
    if job is None:
        raise LookupError("Job not found")
    if job.recruiter_id != actor.id and not actor.is_admin():
        raise PermissionError("You can only view applications for your own jobs")
    return JobApplicationRepository(session).list_for_job(job.id)


def update_application_status(
    session: Session,
    broadcaster: LiveBroadcaster,
    *,
    actor: User,
    application_id: int,
    status: str,
    rejection_message: str | None = None,
    schedule: Scheduler | None = None,
) -> JobApplication:
    """Move an application to ``status`` and notify the freelancer once."""

    if status not in APPLICATION_STATUSES:
        raise ValueError("Invalid application status")
    application, job = _get_application_with_job(session, application_id)
    if job.recruiter_id != actor.id and not actor.is_admin():
        raise PermissionError("You can only manage applications for your own jobs")

    if application.status == status and rejection_message is None:
        return application

    application.status = status
    if status == APPLICATION_STATUS_REJECTED:
        application.rejection_message = (rejection_message or "").strip() or None
    updated = JobApplicationRepository(session).update(application)

    message = _STATUS_MESSAGES[status].format(title=job.title)
    if status == APPLICATION_STATUS_REJECTED and updated.rejection_message:
        message = f"{message} Message from the recruiter: {updated.rejection_message}"
    notification = create_notification(
        session,
        broadcaster,
        user_id=updated.freelancer_id,
        type=NOTIFICATION_TYPE_APPLICATION_UPDATE,
        title="Application Update",
        message=message,
        priority="high" if status in _HIGH_PRIORITY_STATUSES else "normal",
        related_entity_type="application",
        related_entity_id=updated.id,
        action_url="/dashboard?tab=applications",
        metadata={"job_id": job.id, "application_id": updated.id, "status": status},
    )
    schedule_notification_email(schedule, notification, EMAIL_TYPE_APPLICATION_UPDATE)
    return updated


def delete_application(session: Session, *, actor: User, application_id: int) -> None:
    """Hide the application from the caller's side only."""

    application, job = _get_application_with_job(session, application_id)
    if application.freelancer_id == actor.id:
        application.freelancer_deleted = True
    elif job.recruiter_id == actor.id:
        application.recruiter_deleted = True
    else:
        raise PermissionError("Access denied")
    JobApplicationRepository(session).update(application)


__all__ = [
    "apply_to_job",
    "delete_application",
    "list_freelancer_applications",
    "list_job_applications",
    "list_recruiter_applications",
    "update_application_status",
]
