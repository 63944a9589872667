"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    user_id: int
    type: str
    title: str
    message: str
    is_read: bool
    priority: str
    related_entity_type: str | None = None
    related_entity_id: int | None = None
    action_url: str | None = None
    metadata: str | None = None
    expires_at: datetime | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class NotificationCreate(BaseModel):
    """Payload accepted by the admin-only direct creation endpoint."""

    user_id: int
    type: str
    title: str = Field(..., max_length=200)
    message: str
    priority: str = "normal"
    related_entity_type: str | None = None
    related_entity_id: int | None = None
    action_url: str | None = None
    metadata: dict[str, Any] | str | None = None
    expires_at: datetime | None = None


class CategoryCountsRead(BaseModel):
    messages: int
    applications: int
    jobs: int
    ratings: int
    feedback: int
    contact_messages: int
    total: int


class MarkedCountRead(BaseModel):
    updated: int


class NotificationPreferencesRead(BaseModel):
    email_messages: bool
    email_application_updates: bool
    email_job_updates: bool
    email_job_alerts: bool
    email_rating_requests: bool
    email_system_updates: bool
    digest_mode: str
    digest_time: str

    model_config = ConfigDict(from_attributes=True)


class NotificationPreferencesUpdate(BaseModel):
    email_messages: bool | None = None
    email_application_updates: bool | None = None
    email_job_updates: bool | None = None
    email_job_alerts: bool | None = None
    email_rating_requests: bool | None = None
    email_system_updates: bool | None = None
    digest_mode: str | None = None
    digest_time: str | None = None

    model_config = ConfigDict(extra="forbid")


class JobAlertFilterRead(BaseModel):
    id: int
    user_id: int
    skills: list[str]
    locations: list[str]
    keywords: list[str]
    job_types: list[str]
    date_from: date | None = None
    date_to: date | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class JobAlertFilterWrite(BaseModel):
    skills: list[str] | None = None
    locations: list[str] | None = None
    keywords: list[str] | None = None
    job_types: list[str] | None = None
    date_from: date | None = None
    date_to: date | None = None
    is_active: bool | None = None

    model_config = ConfigDict(extra="forbid")
