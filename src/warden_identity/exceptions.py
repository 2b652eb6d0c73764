"""Identity exceptions.

The closed set of failures the identity services report. Each concrete
class belongs to exactly one category (not found, access denied,
invalid credential, conflict, hashing, validation) so callers can
dispatch on the category or on the concrete class.

The base classes come from warden_auth and are re-exported here.
"""

from enum import Enum

from warden_auth.exceptions import (
    AuthError,
    HashingError,
    InvalidCredentialsError,
    InvalidTokenError,
    ValidationError,
    WeakPasswordError,
)

__all__ = [
    "AccessDenialReason",
    "AccessDeniedError",
    "AuthError",
    "ConflictError",
    "EmailTakenError",
    "HashingError",
    "InvalidCredentialsError",
    "InvalidEmailError",
    "InvalidTokenError",
    "NotFoundError",
    "SamePasswordError",
    "TokenNotFoundError",
    "UserNotFoundError",
    "UsernameTakenError",
    "ValidationError",
    "WeakPasswordError",
]


class NotFoundError(AuthError):
    """A user, account or reset token could not be found."""

    def __init__(self, message: str = "Not found!"):
        super().__init__(message)


class UserNotFoundError(NotFoundError):
    """User not found.

    Also raised for soft-deleted users, so a caller can never tell a
    deleted user from an unknown one.
    """

    def __init__(self, message: str = "User not found!"):
        super().__init__(message)


class TokenNotFoundError(NotFoundError):
    """No user holds the given password reset token."""

    def __init__(self, message: str = "Token not found!"):
        super().__init__(message)


class AccessDenialReason(str, Enum):
    """Why the access gate refused a (user, account) pair."""

    ACCOUNT_MISSING = "account_missing"
    USER_INACTIVE = "user_inactive"
    ACCOUNT_UNCONFIRMED = "account_unconfirmed"
    ACCOUNT_INACTIVE = "account_inactive"


_DENIAL_MESSAGES = {
    AccessDenialReason.ACCOUNT_MISSING: "Unable to find user account!",
    AccessDenialReason.USER_INACTIVE: "User is not active!",
    AccessDenialReason.ACCOUNT_UNCONFIRMED: "Account is not confirmed!",
    AccessDenialReason.ACCOUNT_INACTIVE: "Account is not active!",
}


class AccessDeniedError(AuthError):
    """The user or its account is not in a state that allows logging in."""

    def __init__(self, reason: AccessDenialReason, message: str | None = None):
        self.reason = reason
        super().__init__(message or _DENIAL_MESSAGES[reason])


class ConflictError(AuthError):
    """The requested change collides with existing state."""

    def __init__(self, message: str = "Conflict"):
        super().__init__(message)


class UsernameTakenError(ConflictError):
    """Username already registered."""

    def __init__(self, username: str = ""):
        self.username = username
        super().__init__("Username already taken.")


class EmailTakenError(ConflictError):
    """Email already registered."""

    def __init__(self, email: str = ""):
        self.email = email
        super().__init__("Email already taken.")


class SamePasswordError(ConflictError):
    """The new password is the password already in use."""

    def __init__(self, message: str = "You can't use the same password!"):
        super().__init__(message)


class InvalidEmailError(ValidationError):
    """Raised when email format is invalid."""

    def __init__(self, message: str):
        super().__init__(message)
