"""Return values of the identity services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from warden_identity.domain import UpdateResult, User


@dataclass(frozen=True)
class LoginResult:
    """The freshly updated user and its new session token."""

    user: User
    token: str


@dataclass(frozen=True)
class SignupResult:
    """Public projections of the user and account created by a signup."""

    user: dict[str, Any]
    account: dict[str, Any]


@dataclass(frozen=True)
class ResetRequestResult:
    user: User
    update_result: UpdateResult


@dataclass(frozen=True)
class RecoveryResult:
    user: User
    update_result: UpdateResult
