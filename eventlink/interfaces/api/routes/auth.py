"""Endpoints for registration, login and logout."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from eventlink.application.use_cases.users import (
    apply_admin_allowlist,
    authenticate_user,
    register_user as register_user_uc,
)
from eventlink.domain.entities import User
from eventlink.infrastructure.database import get_db
from eventlink.infrastructure.security import create_user_access_token, revoke_token
from eventlink.interfaces.api.dependencies import get_current_user, oauth2_scheme
from eventlink.interfaces.api.routes_helpers import http_errors
from eventlink.interfaces.api.schemas import (
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    Token,
    UserRead,
)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> RegisterResponse:
    """Create a freelancer or recruiter account and sign it in."""

    with http_errors():
        user = register_user_uc(
            db,
            email=payload.email,
            password=payload.password,
            role=payload.role,
            first_name=payload.first_name,
            last_name=payload.last_name,
        )
    user = apply_admin_allowlist(user)
    logger.info("Registered %s account %s", user.role, user.id)
    return RegisterResponse(
        access_token=create_user_access_token(user),
        token_type="bearer",
        user=UserRead.model_validate(user),
    )


# Keeps the signature expected by OAuth2PasswordRequestForm.
@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
) -> Token:
    """Authenticate by email and return a JWT."""

    user = authenticate_user(db, form_data.username, form_data.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Token(access_token=create_user_access_token(user), token_type="bearer", role=user.role)


@router.post("/logout", response_model=MessageResponse)
def logout(
    token: str = Depends(oauth2_scheme),
    _: User = Depends(get_current_user),
) -> MessageResponse:
    """Invalidate the presented token for the rest of its lifetime."""

    revoke_token(token)
    return MessageResponse(message="Logged out")
