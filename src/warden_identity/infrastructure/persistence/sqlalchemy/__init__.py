"""SQLAlchemy persistence for users and accounts."""

from warden_identity.infrastructure.persistence.sqlalchemy.database import (
    create_engine_from_settings,
    create_session_maker,
    create_tables,
    drop_tables,
)
from warden_identity.infrastructure.persistence.sqlalchemy.models import (
    AccountModel,
    Base,
    LinkedIdentityModel,
    UserModel,
)
from warden_identity.infrastructure.persistence.sqlalchemy.repositories import (
    AccountRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

__all__ = [
    "AccountModel",
    "AccountRepositorySQLAlchemy",
    "Base",
    "LinkedIdentityModel",
    "UserModel",
    "UserRepositorySQLAlchemy",
    "create_engine_from_settings",
    "create_session_maker",
    "create_tables",
    "drop_tables",
]
