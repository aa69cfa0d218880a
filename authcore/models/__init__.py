"""SQLAlchemy ORM models."""

from authcore.models.base import Base
from authcore.models.credential import Credential
from authcore.models.role import Role
from authcore.models.session import UserSession
from authcore.models.user import User

__all__ = ["Base", "Credential", "Role", "User", "UserSession"]
