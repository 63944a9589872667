"""Routes for the authenticated account."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eventlink.application.use_cases.users import (
    apply_admin_allowlist,
    delete_user as delete_user_uc,
    update_account as update_account_uc,
)
from eventlink.domain.entities import User
from eventlink.infrastructure.database import get_db
from eventlink.interfaces.api.dependencies import get_current_user
from eventlink.interfaces.api.routes_helpers import http_errors
from eventlink.interfaces.api.schemas import UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)) -> UserRead:
    return UserRead.model_validate(current_user)


@router.patch("/me", response_model=UserRead)
def update_current_user(
    payload: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserRead:
    """Update names or change the password of the caller."""

    with http_errors():
        user = update_account_uc(db, current_user, **payload.model_dump(exclude_unset=True))
    return UserRead.model_validate(apply_admin_allowlist(user))


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_current_user(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> None:
    """Soft delete the caller; existing tokens stop working."""

    with http_errors():
        delete_user_uc(db, current_user.id)
    logger.info("User %s deleted their account", current_user.id)
