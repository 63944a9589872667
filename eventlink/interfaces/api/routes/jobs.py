"""Routes for job postings and applying to them."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from eventlink.application.use_cases.applications import (
    apply_to_job as apply_to_job_uc,
    list_job_applications as list_job_applications_uc,
)
from eventlink.application.use_cases.jobs import (
    create_job as create_job_uc,
    delete_job as delete_job_uc,
    get_job as get_job_uc,
    list_jobs as list_jobs_uc,
    update_job as update_job_uc,
)
from eventlink.domain.entities import User
from eventlink.infrastructure.database import get_db
from eventlink.infrastructure.notifications import LiveBroadcaster
from eventlink.interfaces.api.dependencies import get_broadcaster, get_current_user
from eventlink.interfaces.api.routes_helpers import http_errors
from eventlink.interfaces.api.schemas import (
    ApplicationCreate,
    ApplicationRead,
    JobCreate,
    JobRead,
    JobUpdate,
)

router = APIRouter(prefix="/jobs", tags=["jobs"])
logger = logging.getLogger(__name__)


@router.post("", response_model=JobRead, status_code=status.HTTP_201_CREATED)
def create_job(
    payload: JobCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
    current_user: User = Depends(get_current_user),
) -> JobRead:
    """Publish a job posting and alert matching freelancers."""

    with http_errors():
        job = create_job_uc(
            db,
            broadcaster,
            recruiter=current_user,
            fields=payload.model_dump(),
            schedule=background_tasks.add_task,
        )
    logger.info("Job %s posted by user %s", job.id, current_user.id)
    return JobRead.model_validate(job)


@router.get("", response_model=list[JobRead])
def list_jobs(
    status_filter: str | None = Query(default=None, alias="status"),
    keyword: str | None = None,
    location: str | None = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
) -> list[JobRead]:
    """List postings; anonymous visitors may browse."""

    with http_errors():
        jobs = list_jobs_uc(
            db, status=status_filter, keyword=keyword, location=location, skip=skip, limit=limit
        )
    return [JobRead.model_validate(job) for job in jobs]


@router.get("/mine", response_model=list[JobRead])
def list_my_jobs(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[JobRead]:
    jobs = list_jobs_uc(db, recruiter_id=current_user.id)
    return [JobRead.model_validate(job) for job in jobs]


@router.get("/{job_id}", response_model=JobRead)
def read_job(job_id: int, db: Session = Depends(get_db)) -> JobRead:
    with http_errors():
        job = get_job_uc(db, job_id)
    return JobRead.model_validate(job)


@router.put("/{job_id}", response_model=JobRead)
def update_job(
    job_id: int,
    payload: JobUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
    current_user: User = Depends(get_current_user),
) -> JobRead:
    with http_errors():
        job = update_job_uc(
            db,
            broadcaster,
            actor=current_user,
            job_id=job_id,
            changes=payload.model_dump(exclude_unset=True),
            schedule=background_tasks.add_task,
        )
    return JobRead.model_validate(job)


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job(
    job_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
    current_user: User = Depends(get_current_user),
) -> None:
    with http_errors():
        delete_job_uc(
            db,
            broadcaster,
            actor=current_user,
            job_id=job_id,
            schedule=background_tasks.add_task,
        )
    logger.info("Job %s deleted by user %s", job_id, current_user.id)


@router.post(
    "/{job_id}/apply", response_model=ApplicationRead, status_code=status.HTTP_201_CREATED
)
def apply_to_job(
    job_id: int,
    background_tasks: BackgroundTasks,
    payload: ApplicationCreate | None = None,
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
    current_user: User = Depends(get_current_user),
) -> ApplicationRead:
    with http_errors():
        application = apply_to_job_uc(
            db,
            broadcaster,
            freelancer=current_user,
            job_id=job_id,
            cover_letter=payload.cover_letter if payload else None,
            schedule=background_tasks.add_task,
        )
    return ApplicationRead.model_validate(application)


@router.get("/{job_id}/applications", response_model=list[ApplicationRead])
def list_job_applications(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[ApplicationRead]:
    with http_errors():
        applications = list_job_applications_uc(db, actor=current_user, job_id=job_id)
    return [ApplicationRead.model_validate(application) for application in applications]
