"""Session manager: issue, validate and revoke opaque bearer tokens; sweep expired rows."""

import logging
import uuid
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from authcore.core.config import get_settings
from authcore.core.security import generate_session_token
from authcore.models import UserSession
from authcore.models.base import Clock, utcnow

if TYPE_CHECKING:
    from authcore.core.config import Settings

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Session lifecycle against the sessions table.

    Active -> Expired is a pure function of time, checked on every validate();
    Active -> Revoked deletes the row. Nothing brings a session back.
    Writes are flushed, not committed; the caller owns the transaction.
    """

    def __init__(
        self,
        db: Session,
        ttl: timedelta | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.db = db
        self.ttl = ttl if ttl is not None else timedelta(days=get_settings().SESSION_TTL_DAYS)
        self.clock = clock or utcnow

    def issue(self, user_id: uuid.UUID, ttl: timedelta | None = None) -> UserSession:
        """Create a session for user_id expiring ttl (default 7 days) from now."""
        now = self.clock()
        session = UserSession(
            user_id=user_id,
            token=generate_session_token(),
            expires_at=now + (ttl if ttl is not None else self.ttl),
            created_at=now,
        )
        self.db.add(session)
        self.db.flush()
        return session

    def validate(self, token: str | None) -> UserSession | None:
        """
        Return the session for token if it exists and has not expired.

        Unknown and expired tokens both give None so callers cannot learn
        which tokens ever existed.
        """
        if not token:
            return None
        return (
            self.db.query(UserSession)
            .filter(UserSession.token == token, UserSession.expires_at > self.clock())
            .first()
        )

    def revoke(self, token: str | None) -> None:
        """Delete the session for token. Unknown tokens are a no-op."""
        if not token:
            return
        self.db.query(UserSession).filter(UserSession.token == token).delete(
            synchronize_session=False
        )
        self.db.flush()

    def sweep_expired(self, before: datetime | None = None) -> int:
        """Delete sessions whose expiry is at or before `before` (default now). Returns the count."""
        cutoff = before or self.clock()
        deleted = (
            self.db.query(UserSession)
            .filter(UserSession.expires_at <= cutoff)
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return deleted


def run_session_sweep(session: Session, settings: "Settings", clock: Clock | None = None) -> int:
    """
    Delete expired sessions. Idempotent: safe to run repeatedly.

    Returns the number of rows deleted (0 when SESSION_SWEEP_ENABLED is false).
    """
    if not settings.SESSION_SWEEP_ENABLED:
        logger.info("Session sweep is disabled (SESSION_SWEEP_ENABLED=false); skipping.")
        return 0

    manager = SessionManager(session, clock=clock)
    cutoff = manager.clock()
    deleted_count = manager.sweep_expired(cutoff)
    session.commit()

    if deleted_count > 0:
        logger.info(
            "Session sweep: cutoff=%s, sessions_deleted=%s",
            cutoff.isoformat(),
            deleted_count,
        )
    return deleted_count
