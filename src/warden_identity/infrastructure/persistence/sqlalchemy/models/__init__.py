from warden_identity.infrastructure.persistence.sqlalchemy.models.account_model import (
    AccountModel,
)
from warden_identity.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from warden_identity.infrastructure.persistence.sqlalchemy.models.user_model import (
    LinkedIdentityModel,
    UserModel,
)

__all__ = [
    "AccountModel",
    "Base",
    "LinkedIdentityModel",
    "TimestampMixin",
    "UserModel",
]
