"""Value objects for the user domain."""

from warden_identity.domain.user.value_objects.email import Email
from warden_identity.domain.user.value_objects.linked_identity import LinkedIdentity
from warden_identity.domain.user.value_objects.pending_reset import PendingReset
from warden_identity.domain.user.value_objects.user_label import UserLabel

__all__ = [
    "Email",
    "LinkedIdentity",
    "PendingReset",
    "UserLabel",
]
