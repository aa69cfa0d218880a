"""ORM model for identities (one row per registered person or bot)."""

import uuid

from sqlalchemy import Column, DateTime, Text, Uuid, func

from authcore.models.base import Base, utcnow


class User(Base):
    """
    Identity record. Created once by the registrar; only updated_at changes afterwards.

    Credentials, sessions and role rows reference users.id; nothing deletes a user.
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=True)
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
