"""Role store: append-only role history per identity."""

import uuid

from sqlalchemy.orm import Session

from authcore.core.config import get_settings
from authcore.models import Role
from authcore.models.base import Clock, utcnow
from authcore.schemas.auth import RoleView


class RoleStore:
    """
    Role changes are new rows; history is never updated in place.

    The current role is the row with the latest created_at, ties broken by the
    higher id. current_role() returns None when nothing is assigned; defaulting
    is the caller's decision.
    """

    def __init__(self, db: Session, clock: Clock | None = None) -> None:
        self.db = db
        self.clock = clock or utcnow

    def assign(self, user_id: uuid.UUID, role: str, title: str | None = None) -> Role:
        now = self.clock()
        row = Role(user_id=user_id, role=role, title=title, created_at=now, updated_at=now)
        self.db.add(row)
        self.db.flush()
        return row

    def assign_default(self, user_id: uuid.UUID, role: str | None = None) -> Role:
        """Registration-time role row with no title; role defaults to DEFAULT_ROLE ("user")."""
        return self.assign(user_id, role or get_settings().DEFAULT_ROLE, None)

    def current_role(self, user_id: uuid.UUID) -> RoleView | None:
        row = (
            self.db.query(Role)
            .filter(Role.user_id == user_id)
            .order_by(Role.created_at.desc(), Role.id.desc())
            .first()
        )
        if row is None:
            return None
        return RoleView(role=row.role, title=row.title)
