"""Use cases for authenticating users and resolving their effective role."""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy.orm import Session

from eventlink.config import get_settings
from eventlink.domain.entities import ROLE_ADMIN, User
from eventlink.infrastructure.repositories import UserRepository
from eventlink.infrastructure.security import (
    get_password_hash,
    needs_rehash,
    verify_password,
)


def apply_admin_allowlist(user: User) -> User:
    """Return ``user`` acting as admin when its email is on ``ADMIN_EMAILS``.

    The stored role is never rewritten; removing an address from the
    allowlist is enough to revoke the elevation.
    """

    if user.is_admin():
        return user
    if user.email.strip().lower() in get_settings().admin_email_list:
        return replace(user, role=ROLE_ADMIN)
    return user


def authenticate_user(session: Session, email: str, password: str) -> User | None:
    """Return the user for valid credentials, ``None`` otherwise."""

    repository = UserRepository(session)
    user = repository.get_by_email(email)
    if user is None or not verify_password(password, user.password):
        return None

    if needs_rehash(user.password):
        user.password = get_password_hash(password)
        user = repository.update(user)

    repository.record_login(user.id)
    return apply_admin_allowlist(user)


__all__ = ["apply_admin_allowlist", "authenticate_user"]
