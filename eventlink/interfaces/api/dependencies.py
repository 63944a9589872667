"""FastAPI dependency utilities."""

from __future__ import annotations

from typing import Callable

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from eventlink.application.use_cases.users import apply_admin_allowlist
from eventlink.domain.entities import ROLE_FREELANCER, ROLE_RECRUITER, User
from eventlink.infrastructure.database import get_db
from eventlink.infrastructure.notifications import LiveBroadcaster
from eventlink.infrastructure.repositories import UserRepository
from eventlink.infrastructure.security import (
    decode_access_token,
    is_token_revoked,
    password_signature,
)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/token")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/token", auto_error=False)


def _credentials_error(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    if is_token_revoked(token):
        raise _credentials_error("Token has been invalidated")

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    subject = payload.get("sub")
    signature = payload.get("pwd_sig")
    if not isinstance(subject, str) or not isinstance(signature, str):
        raise _credentials_error()
    try:
        user_id = int(subject)
    except ValueError as exc:
        raise _credentials_error() from exc

    user = UserRepository(db).get(user_id)
    if user is None or user.is_deleted:
        raise _credentials_error("User not found")
    if signature != password_signature(user):
        raise _credentials_error()

    return apply_admin_allowlist(user)


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_optional_user(
    token: str | None = Depends(optional_oauth2_scheme),
    db: Session = Depends(get_db),
) -> User | None:
    """Return the caller when a bearer token is sent, ``None`` for anonymous calls."""

    if not token:
        return None
    return resolve_current_user(token, db)


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current_user


def _require_role(role: str, detail: str) -> Callable[[User], User]:
    def dependency(current_user: User = Depends(get_current_user)) -> User:
        if not current_user.has_role(role):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
        return current_user

    return dependency


require_freelancer = _require_role(ROLE_FREELANCER, "Freelancer access required")
require_recruiter = _require_role(ROLE_RECRUITER, "Recruiter access required")


def get_broadcaster(request: Request) -> LiveBroadcaster:
    """Return the broadcaster wired into the running application."""

    return request.app.state.broadcaster
