"""Auth routes (signup, signin, me, verify, signout, search) and auth dependencies."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from authcore.core.config import get_settings
from authcore.core.database import get_db
from authcore.core.errors import (
    CreationError,
    DuplicateEmailError,
    ForbiddenError,
    InvalidCredentialsError,
    RoleNotFoundError,
    SessionError,
    UnauthorizedError,
)
from authcore.schemas.auth import (
    CurrentUser,
    MeResponse,
    SignInRequest,
    SignInResponse,
    SignOutResponse,
    SignUpRequest,
    SignUpResponse,
    UserSearchResponse,
    VerifyResponse,
)
from authcore.services.authenticator import Authenticator
from authcore.services.credentials import CredentialStore
from authcore.services.registration import IdentityRegistrar

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_authenticator(db: Annotated[Session, Depends(get_db)]) -> Authenticator:
    """Dependency: Authenticator bound to the request's DB session."""
    return Authenticator(db)


def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str | None:
    """Dependency: raw bearer token, or None when the header is missing."""
    if credentials is None:
        return None
    return credentials.credentials


def require_admin(
    token: Annotated[str | None, Depends(get_bearer_token)],
    auth: Annotated[Authenticator, Depends(get_authenticator)],
) -> CurrentUser:
    """Dependency: require a valid session whose current role is 'admin'."""
    try:
        return auth.require_role(token, "admin")
    except UnauthorizedError:
        raise _unauthorized()
    except ForbiddenError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    except RoleNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Role not found",
        )


@router.post("/signup", response_model=SignUpResponse)
def signup(
    body: SignUpRequest,
    db: Annotated[Session, Depends(get_db)],
) -> SignUpResponse:
    """Register an identity with email, password and name. The new identity gets role 'user'."""
    try:
        user_id = IdentityRegistrar(db).register(body.email, body.password, body.name)
    except DuplicateEmailError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except CreationError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    return SignUpResponse(success=True, user_id=user_id)


@router.post("/signin", response_model=SignInResponse)
def signin(
    body: SignInRequest,
    auth: Annotated[Authenticator, Depends(get_authenticator)],
) -> SignInResponse:
    """
    Authenticate with email and password; returns an opaque session token valid for 7 days.
    Include the token in the Authorization header as: Bearer <token>
    """
    try:
        result = auth.sign_in(body.email, body.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)
    except SessionError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    return SignInResponse(success=True, token=result.token, role=result.role, title=result.title)


@router.get("/me", response_model=MeResponse)
def me(
    token: Annotated[str | None, Depends(get_bearer_token)],
    auth: Annotated[Authenticator, Depends(get_authenticator)],
) -> MeResponse:
    """Profile of the identity behind the bearer token. 401 if missing, unknown or expired."""
    try:
        profile = auth.who_am_i(token)
    except UnauthorizedError:
        raise _unauthorized()
    return MeResponse(user=profile)


@router.post("/verify", response_model=VerifyResponse)
def verify(
    token: Annotated[str | None, Depends(get_bearer_token)],
    auth: Annotated[Authenticator, Depends(get_authenticator)],
) -> VerifyResponse:
    """Report whether the bearer token is a live session. Never fails."""
    return VerifyResponse(valid=auth.verify(token))


@router.post("/signout", response_model=SignOutResponse)
def signout(
    token: Annotated[str | None, Depends(get_bearer_token)],
    auth: Annotated[Authenticator, Depends(get_authenticator)],
) -> SignOutResponse:
    """Revoke the bearer token's session. Without a token reports success=false."""
    if token is None:
        return SignOutResponse(success=False)
    try:
        return SignOutResponse(success=auth.sign_out(token))
    except SessionError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)


@router.get("/search", response_model=UserSearchResponse)
def search_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    q: Annotated[str, Query(max_length=255)] = "",
) -> UserSearchResponse:
    """Search identities by name or email substring (admin only)."""
    users = CredentialStore(db).search(q, limit=get_settings().USER_SEARCH_LIMIT)
    return UserSearchResponse(users=users)
