"""User aggregate: identity, credentials and login state."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Union
from uuid import UUID, uuid4

from warden_identity.domain.shared.time import utc_now
from warden_identity.domain.user.value_objects import (
    Email,
    LinkedIdentity,
    PendingReset,
    UserLabel,
)

DEFAULT_ROLES = ("user",)
DEFAULT_LABELS = (UserLabel.IS_ACTIVE,)


def _ordered_roles(roles: Iterable[str]) -> list[str]:
    """Drop duplicate roles, keeping first-seen order."""
    return list(dict.fromkeys(str(role) for role in roles))


def _label_set(labels: Iterable[Union[str, UserLabel]]) -> frozenset[str]:
    return frozenset(
        label.value if isinstance(label, UserLabel) else str(label) for label in labels
    )


class User:
    """
    User aggregate root.

    Owns the credential material (bcrypt hash and the per-user salt) but
    never a plaintext password: hashing happens on the repository write
    path or in the services before a hash is handed over.
    """

    def __init__(  # noqa: PLR0913
        self,
        account_id: UUID,
        username: str,
        email: Union[str, Email],
        roles: Iterable[str] | None = None,
        labels: Iterable[Union[str, UserLabel]] | None = None,
        id: UUID | None = None,
        password_hash: str | None = None,
        salt: str | None = None,
        linked_identities: Mapping[str, LinkedIdentity] | None = None,
        pending_reset: PendingReset | None = None,
        last_login: datetime | None = None,
        title: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = id or uuid4()
        self._account_id = account_id
        self._username = username
        self._email = email if isinstance(email, Email) else Email.parse(email)
        self._roles = _ordered_roles(DEFAULT_ROLES if roles is None else roles)
        self._labels = _label_set(DEFAULT_LABELS if labels is None else labels)
        self._password_hash = password_hash
        self._salt = salt
        self._linked_identities = dict(linked_identities or {})
        self._pending_reset = pending_reset
        self._last_login = last_login
        self.title = title
        self.first_name = first_name
        self.last_name = last_name
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def account_id(self) -> UUID:
        return self._account_id

    @property
    def username(self) -> str:
        return self._username

    @property
    def email(self) -> str:
        return self._email.address

    @property
    def roles(self) -> list[str]:
        return list(self._roles)

    @property
    def labels(self) -> frozenset[str]:
        return self._labels

    @property
    def password_hash(self) -> str | None:
        return self._password_hash

    @property
    def salt(self) -> str | None:
        return self._salt

    @property
    def linked_identities(self) -> dict[str, LinkedIdentity]:
        return dict(self._linked_identities)

    @property
    def pending_reset(self) -> PendingReset | None:
        return self._pending_reset

    @property
    def last_login(self) -> datetime | None:
        return self._last_login

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def is_active(self) -> bool:
        return self.has_label(UserLabel.IS_ACTIVE)

    @property
    def is_deleted(self) -> bool:
        return self.has_label(UserLabel.IS_DELETED)

    def has_label(self, label: Union[str, UserLabel]) -> bool:
        value = label.value if isinstance(label, UserLabel) else label
        return value in self._labels

    def add_label(self, label: Union[str, UserLabel]) -> None:
        self._labels = self._labels | _label_set([label])
        self._touch()

    def remove_label(self, label: Union[str, UserLabel]) -> None:
        self._labels = self._labels - _label_set([label])
        self._touch()

    def mark_deleted(self) -> None:
        """Soft delete. The record stays; logins and tokens stop working."""
        self.add_label(UserLabel.IS_DELETED)

    def record_login(self, at: datetime | None = None) -> None:
        self._last_login = at or utc_now()
        self._touch()

    def assign_salt(self, salt: str) -> None:
        """Set the per-user salt. A salt is generated once and never replaced."""
        if self._salt is not None:
            msg = "User already has a salt"
            raise ValueError(msg)
        self._salt = salt

    def set_password_hash(self, password_hash: str) -> None:
        self._password_hash = password_hash
        self._touch()

    def start_password_reset(self, token: str, at: datetime | None = None) -> PendingReset:
        """Replace any pending reset with a new one; only the latest token counts."""
        self._pending_reset = PendingReset(token=token, reset_at=at or utc_now())
        self._touch()
        return self._pending_reset

    def clear_pending_reset(self) -> None:
        self._pending_reset = None
        self._touch()

    def linked_identity(self, provider: str) -> LinkedIdentity | None:
        return self._linked_identities.get(provider)

    def link_identity(self, identity: LinkedIdentity) -> None:
        """Link (or re-link) the identity for ``identity.provider``."""
        self._linked_identities[identity.provider] = identity
        self._touch()

    def _touch(self) -> None:
        self._updated_at = utc_now()

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        account_id: UUID,
        username: str,
        email: Union[str, Email],
        roles: Iterable[str] | None = None,
        labels: Iterable[Union[str, UserLabel]] | None = None,
        title: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> User:
        return cls(
            account_id=account_id,
            username=username,
            email=email,
            roles=roles,
            labels=labels,
            title=title,
            first_name=first_name,
            last_name=last_name,
        )

    @classmethod
    def reconstitute(cls, **fields) -> User:
        """Rebuild a user from stored state; every field is taken as-is."""
        return cls(**fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, username={self._username!r})"
