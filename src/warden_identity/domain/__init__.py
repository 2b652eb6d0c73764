"""Identity domain: users, accounts and the rules that gate logins."""

from warden_identity.domain.access_gate import AccessGate
from warden_identity.domain.account import Account, AccountLabel, AccountRepository
from warden_identity.domain.shared import UpdateResult
from warden_identity.domain.user import (
    Email,
    LinkedIdentity,
    PendingReset,
    User,
    UserLabel,
    UserRepository,
)

__all__ = [
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
]
