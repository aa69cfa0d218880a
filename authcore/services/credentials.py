"""Credential store: email/password-hash rows and the identity projections joined to them."""

import uuid

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from authcore.core.errors import ConstraintViolation
from authcore.models import Credential, User
from authcore.schemas.auth import UserProfile


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class CredentialStore:
    """
    Persists credentials. Email uniqueness is the only invariant enforced here;
    the store never hashes passwords.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_email(self, email: str) -> Credential | None:
        """Exact lookup by email."""
        return self.db.query(Credential).filter(Credential.email == email).first()

    def create(self, user_id: uuid.UUID, email: str, password_hash: str) -> Credential:
        """
        Insert a credential and flush it inside the caller's transaction.
        Raises ConstraintViolation if the email already exists; the caller must
        then roll back, since the transaction is no longer usable.
        """
        credential = Credential(user_id=user_id, email=email, password_hash=password_hash)
        self.db.add(credential)
        try:
            self.db.flush()
        except IntegrityError as e:
            raise ConstraintViolation("Email already exists") from e
        return credential

    def get_profile(self, user_id: uuid.UUID) -> UserProfile | None:
        """Identity joined with its credential email, or None if either row is missing."""
        row = (
            self.db.query(User.id, User.name, Credential.email, User.created_at)
            .join(Credential, Credential.user_id == User.id)
            .filter(User.id == user_id)
            .first()
        )
        if row is None:
            return None
        return UserProfile(id=row.id, name=row.name, email=row.email, created_at=row.created_at)

    def search(self, term: str, limit: int) -> list[UserProfile]:
        """Case-insensitive substring search over name and email."""
        term = term.strip()
        if not term:
            return []
        pattern = f"%{_escape_like(term)}%"
        rows = (
            self.db.query(User.id, User.name, Credential.email, User.created_at)
            .join(Credential, Credential.user_id == User.id)
            .filter(
                or_(
                    User.name.ilike(pattern, escape="\\"),
                    Credential.email.ilike(pattern, escape="\\"),
                )
            )
            .order_by(Credential.email)
            .limit(limit)
            .all()
        )
        return [
            UserProfile(id=r.id, name=r.name, email=r.email, created_at=r.created_at)
            for r in rows
        ]
