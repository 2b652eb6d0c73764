"""Application services for identity management."""

from warden_identity.application.services.authentication_service import (
    AuthenticationService,
)
from warden_identity.application.services.password_reset_service import (
    PasswordResetService,
)

__all__ = ["AuthenticationService", "PasswordResetService"]
