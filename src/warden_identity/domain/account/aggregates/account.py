"""Account aggregate: the organizational owner of one or more users."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from enum import Enum
from typing import Union
from uuid import UUID, uuid4

from warden_identity.domain.shared.time import utc_now


class AccountLabel(str, Enum):
    """Status flags carried in ``Account.labels``."""

    IS_ACTIVE = "isActive"
    IS_CONFIRMED = "isConfirmed"


DEFAULT_LABELS = (AccountLabel.IS_ACTIVE,)


def _label_set(labels: Iterable[Union[str, AccountLabel]]) -> frozenset[str]:
    return frozenset(
        label.value if isinstance(label, AccountLabel) else str(label)
        for label in labels
    )


class Account:
    """
    Account aggregate root.

    New accounts are active but unconfirmed; confirmation happens out of
    band and is recorded with ``confirm()``.
    """

    def __init__(
        self,
        labels: Iterable[Union[str, AccountLabel]] | None = None,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = id or uuid4()
        self._labels = _label_set(DEFAULT_LABELS if labels is None else labels)
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def labels(self) -> frozenset[str]:
        return self._labels

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def is_active(self) -> bool:
        return self.has_label(AccountLabel.IS_ACTIVE)

    @property
    def is_confirmed(self) -> bool:
        return self.has_label(AccountLabel.IS_CONFIRMED)

    def has_label(self, label: Union[str, AccountLabel]) -> bool:
        value = label.value if isinstance(label, AccountLabel) else label
        return value in self._labels

    def confirm(self) -> None:
        self._labels = self._labels | {AccountLabel.IS_CONFIRMED.value}
        self._updated_at = utc_now()

    def deactivate(self) -> None:
        self._labels = self._labels - {AccountLabel.IS_ACTIVE.value}
        self._updated_at = utc_now()

    @classmethod
    def create(cls, labels: Iterable[Union[str, AccountLabel]] | None = None) -> Account:
        return cls(labels=labels)

    @classmethod
    def reconstitute(
        cls,
        id: UUID,
        labels: Iterable[str],
        created_at: datetime,
        updated_at: datetime,
    ) -> Account:
        return cls(id=id, labels=labels, created_at=created_at, updated_at=updated_at)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Account(id={self._id}, labels={sorted(self._labels)})"
