"""Warden Auth - Generic authentication primitives.

This package provides authentication building blocks that are independent
of the user/account model. It handles:
- Password hashing (bcrypt, per-user salt)
- JWT token creation and verification
- Input validation of token claims

Architecture:
    warden_auth/
    ├── services/           # Pure logic (password hashing, JWT)
    ├── schemas.py          # Data classes and claim models
    └── exceptions.py       # Auth exceptions

Usage:
    from warden_auth import PasswordHasher, TokenIssuer, TokenSettings
"""

from warden_auth.exceptions import (
    AuthError,
    HashingError,
    InvalidCredentialsError,
    InvalidTokenError,
    ValidationError,
    WeakPasswordError,
)
from warden_auth.schemas import (
    TokenClaims,
    TokenOptions,
    TokenPayload,
    TokenSettings,
    validate_input,
)
from warden_auth.services import PasswordHasher, TokenIssuer

__all__ = [
    # Services
    "PasswordHasher",
    "TokenIssuer",
    # Schemas
    "TokenClaims",
    "TokenOptions",
    "TokenPayload",
    "TokenSettings",
    "validate_input",
    # Exceptions
    "AuthError",
    "HashingError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "ValidationError",
    "WeakPasswordError",
]
