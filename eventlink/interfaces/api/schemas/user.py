"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserRead(BaseModel):
    id: int
    email: EmailStr
    role: str
    first_name: str
    last_name: str
    email_verified: bool
    last_login_at: datetime | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class UserSummaryRead(BaseModel):
    id: int
    first_name: str
    last_name: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    current_password: str | None = None
    new_password: str | None = None

    model_config = ConfigDict(extra="forbid")


class RoleUpdate(BaseModel):
    role: str
