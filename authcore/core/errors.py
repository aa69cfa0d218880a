"""Domain errors raised by the stores and orchestrators.

Routes translate these into HTTP responses; raw SQLAlchemy errors never
cross the Registrar/Authenticator boundary.
"""


class AuthError(Exception):
    """Base class for authentication domain errors."""

    default_message = "Authentication error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ConstraintViolation(AuthError):
    """Raised by a store when a uniqueness or integrity constraint rejects a write."""

    default_message = "Constraint violation"


class HashFormatError(AuthError):
    """Raised when a stored password hash cannot be parsed. Never surfaced to callers."""

    default_message = "Malformed password hash"


class DuplicateEmailError(AuthError):
    """Raised at registration when the email already has a credential."""

    default_message = "Email already exists"


class CreationError(AuthError):
    """Raised when the identity/credential/role transaction fails and is rolled back."""

    default_message = "Failed to create user"


class InvalidCredentialsError(AuthError):
    """Raised for an unknown email or a wrong password (deliberately the same error)."""

    default_message = "Invalid credentials"


class UnauthorizedError(AuthError):
    """Raised when a bearer token is missing, unknown, or expired."""

    default_message = "Unauthorized"


class ForbiddenError(AuthError):
    """Raised when a valid session's role is not allowed for the operation."""

    default_message = "Forbidden"


class RoleNotFoundError(AuthError):
    """Raised when an authenticated identity has no role row (data-integrity anomaly)."""

    default_message = "Role not found"


class SessionError(AuthError):
    """Raised when issuing or revoking a session fails in the store and is rolled back."""

    default_message = "Session store failure"
