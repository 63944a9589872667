"""Feedback, contact form and admin dashboard schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class FeedbackCreate(BaseModel):
    feedback_type: str
    message: str
    page_url: str | None = None
    source: str = "header"
    user_email: EmailStr | None = None
    user_name: str | None = Field(default=None, max_length=200)


class FeedbackRead(BaseModel):
    id: int
    feedback_type: str
    message: str
    user_id: int | None = None
    page_url: str | None = None
    source: str
    user_email: str | None = None
    user_name: str | None = None
    status: str
    admin_response: str | None = None
    created_at: datetime | None = None
    resolved_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class FeedbackResponseUpdate(BaseModel):
    response: str
    status: str = "resolved"


class ContactMessageCreate(BaseModel):
    name: str = Field(..., max_length=200)
    email: EmailStr
    subject: str = Field(..., max_length=200)
    message: str


class ContactMessageRead(BaseModel):
    id: int
    name: str
    email: str
    subject: str
    message: str
    status: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class DashboardStatsRead(BaseModel):
    total_users: int
    users_by_role: dict[str, int]
    total_jobs: int
    jobs_by_status: dict[str, int]
    total_applications: int
    feedback_by_status: dict[str, int]
    pending_contact_messages: int


class PurgeResultRead(BaseModel):
    deleted: int
