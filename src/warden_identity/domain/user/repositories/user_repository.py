"""User repository interface.

Storage backends implement the abstract ``_insert``/``_write`` hooks and
the finders. The public ``create``/``replace`` methods are concrete: they
carry the write-path rule that a plaintext password is hashed with the
user's salt (generated once if absent) before anything is persisted.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from warden_auth.services import PasswordHasher
from warden_identity.domain.shared import UpdateResult
from warden_identity.domain.user.aggregates.user import User

# Fields a set-fields ``update`` may touch
UPDATABLE_FIELDS = frozenset(
    {
        "password_hash",
        "pending_reset",
        "last_login",
        "labels",
        "roles",
        "title",
        "first_name",
        "last_name",
    },
)


class UserRepository(ABC):
    """Repository interface for User aggregates."""

    def __init__(self, password_hasher: PasswordHasher):
        self._password_hasher = password_hasher

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find a user by their ID."""

    @abstractmethod
    async def find_by_login(self, username: str, email: str) -> User | None:
        """Find a user whose username equals ``username`` OR whose email equals ``email``."""

    @abstractmethod
    async def find_by_reset_token(self, token: str) -> User | None:
        """Find the user holding exactly this pending reset token."""

    @abstractmethod
    async def find_by_linked_identity(
        self,
        provider: str,
        external_id: str | None,
        email: str | None,
    ) -> User | None:
        """Find a user linked to ``provider``/``external_id`` OR with ``email``."""

    @abstractmethod
    async def update(self, user_id: UUID, changes: Mapping[str, Any]) -> UpdateResult:
        """Set the given fields on one user; keys must be in ``UPDATABLE_FIELDS``."""

    @abstractmethod
    async def delete(self, user_id: UUID) -> bool:
        """Physically remove a user. Only used to undo a failed signup."""

    @abstractmethod
    async def _insert(self, user: User) -> User:
        """Persist a new user exactly as given."""

    @abstractmethod
    async def _write(self, user: User) -> User:
        """Overwrite the stored user with the full given state."""

    async def create(self, user: User, password: str | None = None) -> User:
        """Persist a new user, hashing ``password`` first when given."""
        await self._apply_credentials(user, password)
        return await self._insert(user)

    async def replace(self, user: User, password: str | None = None) -> User:
        """Persist the full user state.

        Passing ``password`` explicitly requests a re-hash; without it the
        stored hash is written back untouched.
        """
        await self._apply_credentials(user, password)
        return await self._write(user)

    async def _apply_credentials(self, user: User, password: str | None) -> None:
        if user.salt is None:
            user.assign_salt(self._password_hasher.generate_salt())
        if password:
            user.set_password_hash(await self._password_hasher.hash(password, user.salt))

    @staticmethod
    def _check_update_fields(changes: Mapping[str, Any]) -> None:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            msg = f"Cannot update user fields: {', '.join(sorted(unknown))}"
            raise ValueError(msg)
