"""Authentication related schemas."""

from pydantic import BaseModel, EmailStr, Field

from .user import UserRead


class Token(BaseModel):
    access_token: str
    token_type: str
    role: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    role: str = Field(..., description="freelancer or recruiter")
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)


class RegisterResponse(BaseModel):
    access_token: str
    token_type: str
    user: UserRead


class MessageResponse(BaseModel):
    message: str
