"""Domain entities for product feedback and the public contact form."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

FEEDBACK_TYPES = ("malfunction", "feature-missing", "suggestion", "other")
FEEDBACK_STATUSES = ("pending", "in_review", "resolved", "closed")
CONTACT_MESSAGE_STATUSES = ("pending", "replied", "closed")


@dataclass
class Feedback:
    id: int | None
    feedback_type: str
    message: str
    user_id: int | None = None
    page_url: str | None = None
    source: str = "header"
    user_email: str | None = None
    user_name: str | None = None
    status: str = "pending"
    admin_response: str | None = None
    admin_user_id: int | None = None
    created_at: datetime | None = None
    resolved_at: datetime | None = None


@dataclass
class ContactMessage:
    id: int | None
    name: str
    email: str
    subject: str
    message: str
    status: str = "pending"
    created_at: datetime | None = None


__all__ = [
    "CONTACT_MESSAGE_STATUSES",
    "ContactMessage",
    "FEEDBACK_STATUSES",
    "FEEDBACK_TYPES",
    "Feedback",
]
