"""Use cases for managing users."""

from .accounts import (
    change_user_role,
    delete_user,
    get_user,
    list_users,
    register_user,
    update_account,
)
from .authentication import apply_admin_allowlist, authenticate_user

__all__ = [
    "apply_admin_allowlist",
    "authenticate_user",
    "change_user_role",
    "delete_user",
    "get_user",
    "list_users",
    "register_user",
    "update_account",
]
