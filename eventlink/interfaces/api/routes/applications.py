"""Routes for tracking and reviewing job applications."""

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from eventlink.application.use_cases.applications import (
    delete_application as delete_application_uc,
    list_freelancer_applications as list_freelancer_applications_uc,
    list_recruiter_applications as list_recruiter_applications_uc,
    update_application_status as update_application_status_uc,
)
from eventlink.domain.entities import Job, JobApplication, User
from eventlink.infrastructure.database import get_db
from eventlink.infrastructure.notifications import LiveBroadcaster
from eventlink.interfaces.api.dependencies import (
    get_broadcaster,
    get_current_user,
    require_freelancer,
    require_recruiter,
)
from eventlink.interfaces.api.routes_helpers import http_errors
from eventlink.interfaces.api.schemas import (
    ApplicationRead,
    ApplicationStatusUpdate,
    ApplicationWithJobRead,
    JobRead,
)

router = APIRouter(prefix="/applications", tags=["applications"])


def _with_job(application: JobApplication, job: Job | None) -> ApplicationWithJobRead:
    return ApplicationWithJobRead(
        **ApplicationRead.model_validate(application).model_dump(),
        job=JobRead.model_validate(job) if job else None,
    )


@router.get("/mine", response_model=list[ApplicationWithJobRead])
def list_my_applications(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_freelancer),
) -> list[ApplicationWithJobRead]:
    pairs = list_freelancer_applications_uc(db, current_user)
    return [_with_job(application, job) for application, job in pairs]


@router.get("/received", response_model=list[ApplicationWithJobRead])
def list_received_applications(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_recruiter),
) -> list[ApplicationWithJobRead]:
    pairs = list_recruiter_applications_uc(db, current_user)
    return [_with_job(application, job) for application, job in pairs]


@router.patch("/{application_id}/status", response_model=ApplicationRead)
def update_application_status(
    application_id: int,
    payload: ApplicationStatusUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
    current_user: User = Depends(get_current_user),
) -> ApplicationRead:
    """Move an application through the hiring pipeline and tell the freelancer."""

    with http_errors():
        application = update_application_status_uc(
            db,
            broadcaster,
            actor=current_user,
            application_id=application_id,
            status=payload.status,
            rejection_message=payload.rejection_message,
            schedule=background_tasks.add_task,
        )
    return ApplicationRead.model_validate(application)


@router.delete("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_application(
    application_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> None:
    with http_errors():
        delete_application_uc(db, actor=current_user, application_id=application_id)
