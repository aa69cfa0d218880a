"""Shared helpers: in-memory SQLite database with the auth schema, a controllable clock, a cheap hasher."""

from datetime import datetime, timedelta, timezone
from unittest import TestCase
from unittest.mock import patch

from argon2 import PasswordHasher, Type
from sqlalchemy.orm import Session, sessionmaker

from authcore.core.database import create_db_engine, create_session_factory
from authcore.models import Base, Credential, User


def memory_session_factory() -> sessionmaker[Session]:
    """Fresh in-memory database with all tables created."""
    engine = create_db_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    return create_session_factory(engine)


# Minimal Argon2id cost so flows that hash on every call stay fast.
FAST_HASHER = PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1, type=Type.ID)


def use_fast_hasher(test: TestCase) -> None:
    """Swap the module hasher for FAST_HASHER for the duration of test."""
    patcher = patch("authcore.core.security._hasher", FAST_HASHER)
    patcher.start()
    test.addCleanup(patcher.stop)


class FakeClock:
    """Callable clock for stores; advance() moves time forward."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


def add_user(db: Session, name: str | None = "Test User", email: str | None = None) -> User:
    """Insert a user (and a credential when email is given) without going through the registrar."""
    user = User(name=name)
    db.add(user)
    db.flush()
    if email is not None:
        db.add(Credential(user_id=user.id, email=email, password_hash="unused"))
        db.flush()
    return user
