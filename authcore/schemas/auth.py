"""Request/response schemas for auth endpoints and auth service results."""

import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from authcore.core.security import (
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)


def _require_utf8_password(v: str) -> str:
    try:
        v.encode("utf-8")
    except UnicodeEncodeError:
        raise ValueError("Password must be valid UTF-8 text")
    return v


class SignUpRequest(BaseModel):
    """Registration payload."""

    email: EmailStr = Field(..., description="Email address (unique)")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description="Password",
    )
    name: str = Field(..., max_length=NAME_MAX_LEN, description="Display name")

    @field_validator("password")
    @classmethod
    def validate_password_encoding(cls, v: str) -> str:
        return _require_utf8_password(v)


class SignUpResponse(BaseModel):
    """Identity created by registration."""

    success: bool = True
    user_id: uuid.UUID


class SignInRequest(BaseModel):
    """Credentials for sign-in."""

    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LEN, description="Email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("password")
    @classmethod
    def validate_password_encoding(cls, v: str) -> str:
        return _require_utf8_password(v)


class RoleView(BaseModel):
    """Current role of an identity."""

    role: str
    title: str | None = None

    class Config:
        from_attributes = True


class SignInResult(BaseModel):
    """Outcome of a successful sign-in."""

    user_id: uuid.UUID
    token: str
    role: str
    title: str | None = None


class SignInResponse(BaseModel):
    """Bearer token returned after successful sign-in."""

    success: bool = True
    token: str = Field(..., description="Opaque session token; send as Authorization: Bearer <token>")
    role: str
    title: str | None = None


class UserProfile(BaseModel):
    """Identity joined with its credential email (no password hash)."""

    id: uuid.UUID
    name: str | None = None
    email: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class MeResponse(BaseModel):
    """Response for GET /auth/me."""

    user: UserProfile


class VerifyResponse(BaseModel):
    """Response for POST /auth/verify."""

    valid: bool


class SignOutResponse(BaseModel):
    """Response for POST /auth/signout."""

    success: bool


class CurrentUser(BaseModel):
    """Authenticated identity (id, role) for dependency injection."""

    id: uuid.UUID
    role: str
    title: str | None = None


class UserSearchResponse(BaseModel):
    """Response for GET /auth/search (admin only)."""

    users: list[UserProfile]
