"""Use cases for creating and maintaining user accounts."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from eventlink.domain.entities import SELF_SERVICE_ROLES, USER_ROLES, User
from eventlink.infrastructure.repositories import UserRepository
from eventlink.infrastructure.security import get_password_hash, verify_password

MIN_PASSWORD_LENGTH = 8


def _validate_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")


def register_user(
    session: Session,
    *,
    email: str,
    password: str,
    role: str,
    first_name: str,
    last_name: str,
    allowed_roles: Sequence[str] = SELF_SERVICE_ROLES,
) -> User:
    """Create a new account ensuring unique email addresses."""

    repository = UserRepository(session)
    normalized_email = email.strip().lower()
    if role not in allowed_roles:
        raise ValueError("Invalid role")
    if repository.get_by_email(normalized_email, include_deleted=True):
        raise ValueError("An account with this email already exists")
    _validate_password(password)
    if not first_name.strip() or not last_name.strip():
        raise ValueError("First and last name are required")

    user = User(
        id=None,
        email=normalized_email,
        password=get_password_hash(password),
        role=role,
        first_name=first_name.strip(),
        last_name=last_name.strip(),
    )
    return repository.create(user)


def get_user(session: Session, user_id: int) -> User:
    user = UserRepository(session).get(user_id)
    if user is None:
        raise LookupError("User not found")
    return user


def list_users(
    session: Session, *, skip: int = 0, limit: int = 100, role: str | None = None
) -> Sequence[User]:
    if role is not None and role not in USER_ROLES:
        raise ValueError("Invalid role")
    return UserRepository(session).list(skip=skip, limit=limit, role=role)


def update_account(
    session: Session,
    user: User,
    *,
    first_name: str | None = None,
    last_name: str | None = None,
    new_password: str | None = None,
    current_password: str | None = None,
) -> User:
    """Update the caller's own names and, with the current password, the password."""

    repository = UserRepository(session)
    stored = repository.get(user.id)
    if stored is None:
        raise LookupError("User not found")

    if first_name is not None:
        if not first_name.strip():
            raise ValueError("First name cannot be empty")
        stored.first_name = first_name.strip()
    if last_name is not None:
        if not last_name.strip():
            raise ValueError("Last name cannot be empty")
        stored.last_name = last_name.strip()
    if new_password is not None:
        if not current_password or not verify_password(current_password, stored.password):
            raise PermissionError("Current password is incorrect")
        _validate_password(new_password)
        stored.password = get_password_hash(new_password)

    return repository.update(stored)


def change_user_role(session: Session, *, user_id: int, role: str) -> User:
    if role not in USER_ROLES:
        raise ValueError("Invalid role")
    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise LookupError("User not found")
    user.role = role
    return repository.update(user)


def delete_user(session: Session, user_id: int) -> None:
    """Soft delete the account; the row stays for conversations and ratings."""

    repository = UserRepository(session)
    if repository.get(user_id) is None:
        raise LookupError("User not found")
    repository.soft_delete(user_id)


__all__ = [
    "MIN_PASSWORD_LENGTH",
    "change_user_role",
    "delete_user",
    "get_user",
    "list_users",
    "register_user",
    "update_account",
]
