"""ORM model for bearer sessions."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Text, Uuid, func

from authcore.models.base import Base, utcnow


class UserSession(Base):
    """
    Opaque bearer token with an absolute expiry.

    Valid iff now < expires_at. Revocation deletes the row.
    """

    __tablename__ = "sessions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    token = Column(Text, nullable=False, unique=True)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"UserSession(id={self.id!r}, user_id={self.user_id!r}, expires_at={self.expires_at!r})"
