"""Use cases for rating freelancers after a gig."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eventlink.domain.entities import (
    APPLICATION_STATUS_HIRED,
    NOTIFICATION_TYPE_RATING_RECEIVED,
    NOTIFICATION_TYPE_RATING_REQUEST,
    RATING_REQUEST_COMPLETED,
    RATING_REQUEST_DECLINED,
    RATING_REQUEST_PENDING,
    Job,
    JobApplication,
    Rating,
    RatingRequest,
    User,
)
from eventlink.domain.exceptions import ConflictError
from eventlink.infrastructure.notifications import LiveBroadcaster
from eventlink.infrastructure.repositories import (
    JobApplicationRepository,
    JobRepository,
    RatingRepository,
    RatingRequestRepository,
)

from .notifications import (
    EMAIL_TYPE_RATING_REQUEST,
    Scheduler,
    create_notification,
    schedule_notification_email,
)


def _get_hired_application(session: Session, application_id: int) -> tuple[JobApplication, Job]:
    application = JobApplicationRepository(session).get(application_id)
    if application is None:
        raise LookupError("Application not found")
    job = JobRepository(session).get(application.job_id)
    if job is None:
        raise LookupError("Job not found")
    if application.status != APPLICATION_STATUS_HIRED:
        raise ValueError("Only hired applications can be rated")
    return application, job


def create_rating(
    session: Session,
    broadcaster: LiveBroadcaster,
    *,
    recruiter: User,
    job_application_id: int,
    rating: int,
) -> Rating:
    if not 1 <= rating <= 5:
        raise ValueError("Rating must be between 1 and 5")
    application, job = _get_hired_application(session, job_application_id)
    if job.recruiter_id != recruiter.id:
        raise PermissionError("You can only rate freelancers hired for your own jobs")

    repository = RatingRepository(session)
    if repository.get_by_application(application.id) is not None:
        raise ConflictError("This application has already been rated")
    try:
        saved = repository.create(
            Rating(
                id=None,
                job_application_id=application.id,
                recruiter_id=recruiter.id,
                freelancer_id=application.freelancer_id,
                rating=rating,
            )
        )
    except IntegrityError as exc:
        session.rollback()
        raise ConflictError("This application has already been rated") from exc

    requests = RatingRequestRepository(session)
    pending = requests.get_pending_for_application(application.id)
    if pending is not None:
        requests.set_status(pending.id, RATING_REQUEST_COMPLETED)

    create_notification(
        session,
        broadcaster,
        user_id=application.freelancer_id,
        type=NOTIFICATION_TYPE_RATING_RECEIVED,
        title="New Rating Received",
        message=f'You received a {rating}-star rating for "{job.title}".',
        related_entity_type="rating",
        related_entity_id=saved.id,
        action_url="/dashboard?tab=ratings",
        metadata={"rating": rating, "job_id": job.id},
    )
    return saved


def list_freelancer_ratings(session: Session, freelancer_id: int) -> Sequence[Rating]:
    return RatingRepository(session).list_for_freelancer(freelancer_id)


def get_average_rating(session: Session, freelancer_id: int) -> tuple[float | None, int]:
    return RatingRepository(session).average_for_freelancer(freelancer_id)


def request_rating(
    session: Session,
    broadcaster: LiveBroadcaster,
    *,
    freelancer: User,
    job_application_id: int,
    schedule: Scheduler | None = None,
) -> RatingRequest:
    """Ask the recruiter of a hired application for a rating."""

    application, job = _get_hired_application(session, job_application_id)
    if application.freelancer_id != freelancer.id:
        raise PermissionError("You can only request ratings for your own applications")
    if RatingRepository(session).get_by_application(application.id) is not None:
        raise ConflictError("This application has already been rated")

    requests = RatingRequestRepository(session)
    if requests.get_pending_for_application(application.id) is not None:
        raise ConflictError("A rating request is already pending")
    rating_request = requests.create(
        RatingRequest(
            id=None,
            job_application_id=application.id,
            freelancer_id=freelancer.id,
            recruiter_id=job.recruiter_id,
        )
    )

    notification = create_notification(
        session,
        broadcaster,
        user_id=job.recruiter_id,
        type=NOTIFICATION_TYPE_RATING_REQUEST,
        title="Rating Request",
        message=f'{freelancer.full_name} asked you to rate their work on "{job.title}".',
        related_entity_type="application",
        related_entity_id=application.id,
        action_url="/dashboard?tab=ratings",
        metadata={"rating_request_id": rating_request.id, "job_id": job.id},
    )
    schedule_notification_email(schedule, notification, EMAIL_TYPE_RATING_REQUEST)
    return rating_request


def list_pending_rating_requests(session: Session, recruiter: User) -> Sequence[RatingRequest]:
    return RatingRequestRepository(session).list_pending_for_recruiter(recruiter.id)


def decline_rating_request(session: Session, *, recruiter: User, request_id: int) -> RatingRequest:
    requests = RatingRequestRepository(session)
    rating_request = requests.get(request_id)
    if rating_request is None:
        raise LookupError("Rating request not found")
    if rating_request.recruiter_id != recruiter.id:
        raise PermissionError("Access denied")
    if rating_request.status != RATING_REQUEST_PENDING:
        raise ValueError("Rating request is no longer pending")
    return requests.set_status(rating_request.id, RATING_REQUEST_DECLINED)


__all__ = [
    "create_rating",
    "decline_rating_request",
    "get_average_rating",
    "list_freelancer_ratings",
    "list_pending_rating_requests",
    "request_rating",
]
