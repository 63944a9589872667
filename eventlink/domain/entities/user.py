"""Domain entity representing a marketplace account."""

from dataclasses import dataclass
from datetime import datetime

ROLE_FREELANCER = "freelancer"
ROLE_RECRUITER = "recruiter"
ROLE_ADMIN = "admin"

USER_ROLES = (ROLE_FREELANCER, ROLE_RECRUITER, ROLE_ADMIN)
SELF_SERVICE_ROLES = (ROLE_FREELANCER, ROLE_RECRUITER)


@dataclass
class User:
    """Core attributes describing an EventLink user."""

    id: int | None
    email: str
    password: str
    role: str
    first_name: str
    last_name: str
    email_verified: bool = False
    last_login_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def has_role(self, role: str) -> bool:
        """Return ``True`` when the user's role matches ``role``."""

        return self.role.lower() == role.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ROLE_ADMIN)

    def is_freelancer(self) -> bool:
        return self.has_role(ROLE_FREELANCER)

    def is_recruiter(self) -> bool:
        return self.has_role(ROLE_RECRUITER)


__all__ = [
    "ROLE_ADMIN",
    "ROLE_FREELANCER",
    "ROLE_RECRUITER",
    "SELF_SERVICE_ROLES",
    "USER_ROLES",
    "User",
]
