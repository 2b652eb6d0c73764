from warden_identity.infrastructure.persistence.sqlalchemy.repositories.account_repository import (  # noqa: E501
    AccountRepositorySQLAlchemy,
)
from warden_identity.infrastructure.persistence.sqlalchemy.repositories.user_repository import (  # noqa: E501
    UserRepositorySQLAlchemy,
)

__all__ = [
    "AccountRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
]
