"""ORM model for email/password credentials."""

import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Text, Uuid, false, func

from authcore.models.base import Base, utcnow


class Credential(Base):
    """
    Email and Argon2 password hash for one identity.

    email is globally unique (exact match under the database collation).
    is_verified is stored but no operation changes it.
    """

    __tablename__ = "auth"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    email = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    is_verified = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )
