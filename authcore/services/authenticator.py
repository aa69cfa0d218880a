"""Sign-in, session checks and sign-out on top of the credential, session and role stores."""

import logging
import uuid
from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from authcore.core.config import get_settings
from authcore.core.errors import (
    ForbiddenError,
    InvalidCredentialsError,
    RoleNotFoundError,
    SessionError,
    UnauthorizedError,
)
from authcore.core.security import hash_password, needs_rehash, verify_password
from authcore.models import Credential
from authcore.schemas.auth import CurrentUser, SignInResult, UserProfile
from authcore.services.credentials import CredentialStore
from authcore.services.roles import RoleStore
from authcore.services.sessions import SessionManager

logger = logging.getLogger(__name__)


class Authenticator:
    """
    Orchestrates the authentication flows for one database session.

    Unknown email and wrong password produce the same InvalidCredentialsError and
    the same log line. Timing is not equalized: an unknown email skips hashing.
    Store failures while writing sessions are rolled back and raised as SessionError.
    """

    def __init__(
        self,
        db: Session,
        sessions: SessionManager | None = None,
        credentials: CredentialStore | None = None,
        roles: RoleStore | None = None,
        verifier: Callable[[str, str], bool] = verify_password,
        hasher: Callable[[str], str] = hash_password,
    ) -> None:
        self.db = db
        self.sessions = sessions or SessionManager(db)
        self.credentials = credentials or CredentialStore(db)
        self.roles = roles or RoleStore(db)
        self.verifier = verifier
        self.hasher = hasher

    def _upgrade_hash(self, credential: Credential, password: str) -> None:
        """Re-hash with the configured Argon2 parameters when the stored digest is weaker."""
        if needs_rehash(credential.password_hash):
            credential.password_hash = self.hasher(password)
            logger.info("Upgraded password hash parameters for identity id=%s", credential.user_id)

    def sign_in(self, email: str, password: str) -> SignInResult:
        """
        Verify email/password, issue a session and return token plus current role.
        Raises InvalidCredentialsError for any credential failure.
        """
        credential = self.credentials.find_by_email(email)
        if credential is None or not self.verifier(password, credential.password_hash):
            logger.info("Sign-in rejected: invalid credentials")
            raise InvalidCredentialsError()

        try:
            self._upgrade_hash(credential, password)
            session = self.sessions.issue(credential.user_id)
            current = self.roles.current_role(credential.user_id)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Session issue failed; transaction rolled back: %s", type(e).__name__)
            raise SessionError("Failed to create session") from e

        if current is None:
            logger.warning("Identity id=%s has no role row; defaulting", credential.user_id)
            role, title = get_settings().DEFAULT_ROLE, None
        else:
            role, title = current.role, current.title
        return SignInResult(user_id=credential.user_id, token=session.token, role=role, title=title)

    def _require_session_user(self, token: str | None) -> uuid.UUID:
        session = self.sessions.validate(token)
        if session is None:
            raise UnauthorizedError()
        return session.user_id

    def who_am_i(self, token: str | None) -> UserProfile:
        """Profile (id, name, email, created_at) of the token's identity. Raises UnauthorizedError."""
        user_id = self._require_session_user(token)
        profile = self.credentials.get_profile(user_id)
        if profile is None:
            raise UnauthorizedError()
        return profile

    def verify(self, token: str | None) -> bool:
        """True iff token names an unexpired session. Never raises."""
        return self.sessions.validate(token) is not None

    def sign_out(self, token: str | None) -> bool:
        """Revoke token. Reports True whether or not the session existed."""
        try:
            self.sessions.revoke(token)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Session revoke failed; transaction rolled back: %s", type(e).__name__)
            raise SessionError("Failed to sign out") from e
        return True

    def require_role(self, token: str | None, *allowed: str) -> CurrentUser:
        """
        Resolve the token's identity and current role.

        Raises UnauthorizedError for an invalid session, RoleNotFoundError if the
        identity has no role row at all, and ForbiddenError if allowed is given and
        the current role is not in it.
        """
        user_id = self._require_session_user(token)
        current = self.roles.current_role(user_id)
        if current is None:
            logger.error("Identity id=%s holds a valid session but has no role row", user_id)
            raise RoleNotFoundError()
        if allowed and current.role not in allowed:
            raise ForbiddenError()
        return CurrentUser(id=user_id, role=current.role, title=current.title)
