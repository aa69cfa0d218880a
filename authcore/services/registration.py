"""Identity registration: user + credential + initial role as one transaction."""

import logging
import uuid
from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from authcore.core.errors import ConstraintViolation, CreationError, DuplicateEmailError
from authcore.core.security import hash_password
from authcore.models import User
from authcore.services.credentials import CredentialStore
from authcore.services.roles import RoleStore

logger = logging.getLogger(__name__)


class IdentityRegistrar:
    """
    Creates identities.

    The email pre-check only saves hashing work for obvious duplicates; the
    unique constraint on auth.email is what actually guarantees uniqueness, and a
    concurrent duplicate that slips past the pre-check aborts the transaction.
    """

    def __init__(
        self,
        db: Session,
        hasher: Callable[[str], str] = hash_password,
        credentials: CredentialStore | None = None,
        roles: RoleStore | None = None,
    ) -> None:
        self.db = db
        self.hasher = hasher
        self.credentials = credentials or CredentialStore(db)
        self.roles = roles or RoleStore(db)

    def register(self, email: str, password: str, name: str | None = None) -> uuid.UUID:
        """
        Register an identity with the default role. Returns the new user id.

        Raises DuplicateEmailError if the email is taken (nothing is written) and
        CreationError if the transaction fails (nothing is written either).
        """
        return self.register_with_role(email, password, name)

    def register_with_role(
        self,
        email: str,
        password: str,
        name: str | None = None,
        role: str | None = None,
        title: str | None = None,
    ) -> uuid.UUID:
        """Same as register(), with an explicit initial role (bootstrap of admins, bots)."""
        if self.credentials.find_by_email(email) is not None:
            raise DuplicateEmailError()

        try:
            password_hash = self.hasher(password)
        except ValueError as e:
            # e.g. a password with lone surrogates that cannot be UTF-8 encoded
            logger.warning("Password could not be hashed: %s", type(e).__name__)
            raise CreationError() from e

        try:
            user = User(name=name)
            self.db.add(user)
            self.db.flush()
            self.credentials.create(user.id, email, password_hash)
            if role is None:
                assigned = self.roles.assign_default(user.id)
            else:
                assigned = self.roles.assign(user.id, role, title)
            self.db.commit()
        except (ConstraintViolation, SQLAlchemyError) as e:
            self.db.rollback()
            logger.exception("Identity creation failed; transaction rolled back: %s", type(e).__name__)
            raise CreationError() from e

        logger.info("Registered identity id=%s role=%s", user.id, assigned.role)
        return user.id
