"""Authentication services.

Provides password hashing and session token management.
"""

from warden_auth.services.password_service import PasswordHasher
from warden_auth.services.token_service import TokenIssuer

__all__ = [
    "PasswordHasher",
    "TokenIssuer",
]
