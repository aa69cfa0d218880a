"""SQLAlchemy declarative Base and shared model configuration."""

from collections.abc import Callable
from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    """Timezone-aware current time; default for timestamp columns and store clocks."""
    return datetime.now(timezone.utc)


# Injectable time source for stores; tests substitute a controllable clock.
Clock = Callable[[], datetime]


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass
