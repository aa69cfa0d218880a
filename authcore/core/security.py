"""Password hashing (Argon2id) and session token generation."""

import logging
import secrets

from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError

from authcore.core.config import settings
from authcore.core.errors import HashFormatError

logger = logging.getLogger(__name__)

# Min/max lengths for email and password validation (input validation layer).
EMAIL_MAX_LEN = 320
NAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

_hasher = PasswordHasher(
    time_cost=settings.ARGON2_TIME_COST,
    memory_cost=settings.ARGON2_MEMORY_COST,
    parallelism=settings.ARGON2_PARALLELISM,
    type=Type.ID,
)


def hash_password(plain_password: str) -> str:
    """
    Hash a plain-text password for storage. Do not store plain passwords.

    The encoded result carries algorithm, parameters and a fresh random salt,
    so verification needs nothing but the digest itself.
    """
    return _hasher.hash(plain_password)


def _is_encodable(plain_password: str) -> bool:
    try:
        plain_password.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _check_password(plain_password: str, hashed: str) -> bool:
    """Verify against an Argon2 digest. Raises HashFormatError if the digest is malformed."""
    try:
        return _hasher.verify(hashed, plain_password)
    except VerifyMismatchError:
        return False
    except (InvalidHash, UnicodeError) as e:
        # argon2-cffi encodes the digest as ASCII before parsing it
        raise HashFormatError() from e


def verify_password(plain_password: str, hashed: str | None) -> bool:
    """
    Verify a plain password against a stored hash.

    A corrupt or unparseable stored hash counts as a mismatch, so callers
    cannot tell it apart from a wrong password.
    """
    if not hashed:
        return False
    if not _is_encodable(plain_password):
        return False
    try:
        return _check_password(plain_password, hashed)
    except HashFormatError:
        logger.warning("Stored password hash is malformed; treating as mismatch")
        return False
    except VerificationError:
        return False


def needs_rehash(hashed: str) -> bool:
    """True when hashed was produced with parameters other than the configured ones."""
    try:
        return _hasher.check_needs_rehash(hashed)
    except (InvalidHash, ValueError):
        return True


def generate_session_token(num_bytes: int | None = None) -> str:
    """Return a URL-safe random token with num_bytes of entropy (default from settings)."""
    return secrets.token_urlsafe(num_bytes or settings.SESSION_TOKEN_BYTES)
