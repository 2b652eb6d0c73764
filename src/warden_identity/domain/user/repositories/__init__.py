from warden_identity.domain.user.repositories.user_repository import (
    UPDATABLE_FIELDS,
    UserRepository,
)

__all__ = ["UPDATABLE_FIELDS", "UserRepository"]
