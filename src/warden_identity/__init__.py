"""Warden Identity - users, accounts, and their credential lifecycle.

This package handles:
- Signup of an account and its first user
- Password and social login, gated by user and account status
- Session token validation
- Password reset, recovery and change
- Notification emails (welcome, password reset)

The primitives (hashing, JWT) live in warden_auth; this package binds
them to the User and Account aggregates.
"""

from warden_identity.application.notifications import NotificationDispatcher
from warden_identity.application.results import (
    LoginResult,
    RecoveryResult,
    ResetRequestResult,
    SignupResult,
)
from warden_identity.application.services import (
    AuthenticationService,
    PasswordResetService,
)
from warden_identity.domain import (
    AccessGate,
    Account,
    AccountLabel,
    AccountRepository,
    Email,
    LinkedIdentity,
    PendingReset,
    UpdateResult,
    User,
    UserLabel,
    UserRepository,
)
from warden_identity.exceptions import (
    AccessDenialReason,
    AccessDeniedError,
    AuthError,
    ConflictError,
    EmailTakenError,
    HashingError,
    InvalidCredentialsError,
    InvalidEmailError,
    InvalidTokenError,
    NotFoundError,
    SamePasswordError,
    TokenNotFoundError,
    UsernameTakenError,
    UserNotFoundError,
    ValidationError,
    WeakPasswordError,
)
from warden_identity.factory import IdentityServices
from warden_identity.serializers import (
    dump_account,
    dump_login,
    dump_user,
    token_claims,
)

__all__ = [
    # Domain
    "AccessGate",
    "Account",
    "AccountLabel",
    "AccountRepository",
    "Email",
    "LinkedIdentity",
    "PendingReset",
    "UpdateResult",
    "User",
    "UserLabel",
    "UserRepository",
    # Exceptions
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
    # Application
    "AuthenticationService",
    "IdentityServices",
    "LoginResult",
    "NotificationDispatcher",
    "PasswordResetService",
    "RecoveryResult",
    "ResetRequestResult",
    "SignupResult",
    # Serializers
    "dump_account",
    "dump_login",
    "dump_user",
    "token_claims",
]
