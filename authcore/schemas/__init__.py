"""Pydantic request/response schemas."""

from authcore.schemas.auth import (
    CurrentUser,
    MeResponse,
    RoleView,
    SignInRequest,
    SignInResponse,
    SignInResult,
    SignOutResponse,
    SignUpRequest,
    SignUpResponse,
    UserProfile,
    UserSearchResponse,
    VerifyResponse,
)
from authcore.schemas.health import HealthResponse

__all__ = [
    "CurrentUser",
    "HealthResponse",
    "MeResponse",
    "RoleView",
    "SignInRequest",
    "SignInResponse",
    "SignInResult",
    "SignOutResponse",
    "SignUpRequest",
    "SignUpResponse",
    "UserProfile",
    "UserSearchResponse",
    "VerifyResponse",
]
