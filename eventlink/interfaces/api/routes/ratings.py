"""Routes for rating freelancers and requesting ratings."""

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from eventlink.application.use_cases.ratings import (
    create_rating as create_rating_uc,
    decline_rating_request as decline_rating_request_uc,
    get_average_rating,
    list_freelancer_ratings,
    list_pending_rating_requests,
    request_rating as request_rating_uc,
)
from eventlink.domain.entities import User
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
    AverageRatingRead,
    RatingCreate,
    RatingRead,
    RatingRequestCreate,
    RatingRequestRead,
)

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.post("", response_model=RatingRead, status_code=status.HTTP_201_CREATED)
def create_rating(
    payload: RatingCreate,
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
    current_user: User = Depends(get_current_user),
) -> RatingRead:
    with http_errors():
        rating = create_rating_uc(
            db,
            broadcaster,
            recruiter=current_user,
            job_application_id=payload.job_application_id,
            rating=payload.rating,
        )
    return RatingRead.model_validate(rating)


@router.get("/freelancer/{freelancer_id}", response_model=list[RatingRead])
def read_freelancer_ratings(
    freelancer_id: int,
    db: Session = Depends(get_db),
) -> list[RatingRead]:
    return [RatingRead.model_validate(rating) for rating in list_freelancer_ratings(db, freelancer_id)]


@router.get("/freelancer/{freelancer_id}/average", response_model=AverageRatingRead)
def read_freelancer_average(
    freelancer_id: int,
    db: Session = Depends(get_db),
) -> AverageRatingRead:
    average, count = get_average_rating(db, freelancer_id)
    return AverageRatingRead(freelancer_id=freelancer_id, average=average, count=count)


@router.post("/requests", response_model=RatingRequestRead, status_code=status.HTTP_201_CREATED)
def request_rating(
    payload: RatingRequestCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    broadcaster: LiveBroadcaster = Depends(get_broadcaster),
    current_user: User = Depends(require_freelancer),
) -> RatingRequestRead:
    """Ask the recruiter of a completed gig to leave a rating."""

    with http_errors():
        rating_request = request_rating_uc(
            db,
            broadcaster,
            freelancer=current_user,
            job_application_id=payload.job_application_id,
            schedule=background_tasks.add_task,
        )
    return RatingRequestRead.model_validate(rating_request)


@router.get("/requests", response_model=list[RatingRequestRead])
def read_pending_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_recruiter),
) -> list[RatingRequestRead]:
    return [
        RatingRequestRead.model_validate(rating_request)
        for rating_request in list_pending_rating_requests(db, current_user)
    ]


@router.patch("/requests/{request_id}/decline", response_model=RatingRequestRead)
def decline_rating_request(
    request_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_recruiter),
) -> RatingRequestRead:
    with http_errors():
        rating_request = decline_rating_request_uc(db, recruiter=current_user, request_id=request_id)
    return RatingRequestRead.model_validate(rating_request)
