"""User domain: identity, credentials and login state of a principal."""

from warden_identity.domain.user.aggregates import User
from warden_identity.domain.user.repositories import UPDATABLE_FIELDS, UserRepository
from warden_identity.domain.user.value_objects import (
    Email,
    LinkedIdentity,
    PendingReset,
    UserLabel,
)

__all__ = [
    "UPDATABLE_FIELDS",
    "Email",
    "LinkedIdentity",
    "PendingReset",
    "User",
    "UserLabel",
    "UserRepository",
]
