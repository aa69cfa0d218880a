"""ORM model for role assignments (append-only history per identity)."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text, Uuid, func

from authcore.models.base import Base, utcnow


class Role(Base):
    """
    One role assignment. The current role is the newest row for the user.

    role: free-form label, in practice one of user, admin, employee, client, bot.
    id is an increasing integer so equal created_at values still order by insertion.
    """

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    role = Column(Text, nullable=False)
    title = Column(Text, nullable=True)
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
