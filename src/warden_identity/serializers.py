"""Projections of internal records.

Two disjoint views:

- the public API view (``dump_user``, ``dump_account``, ``dump_login``),
  safe for response bodies: never a password hash, salt, pending reset or
  provider token
- the token-claims view (``token_claims``), the payload signed into a
  session token

All functions are pure.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from warden_auth import TokenClaims

if TYPE_CHECKING:
    from warden_identity.application.results import LoginResult
    from warden_identity.domain import Account, User


class _View(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("labels", mode="before", check_fields=False)
    @classmethod
    def _sorted_labels(cls, v: Any) -> list[str]:
        return sorted(v)


class UserView(_View):
    """Public fields of a user."""

    id: UUID
    account_id: UUID
    username: str
    email: str
    title: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    roles: list[str]
    labels: list[str]
    last_login: datetime | None = None
    created_at: datetime
    updated_at: datetime


class AccountView(_View):
    """Public fields of an account."""

    id: UUID
    labels: list[str]
    created_at: datetime
    updated_at: datetime


def dump_user(user: User) -> dict[str, Any]:
    return UserView.model_validate(user).model_dump(mode="json")


def dump_account(account: Account) -> dict[str, Any]:
    return AccountView.model_validate(account).model_dump(mode="json")


def dump_login(result: LoginResult) -> dict[str, Any]:
    """Public user view plus the freshly minted session token."""
    return {**dump_user(result.user), "token": result.token}


def token_claims(user: User) -> TokenClaims:
    """Claims for a session token: id as string, username, account, scope = roles."""
    return TokenClaims(
        id=str(user.id),
        username=user.username,
        account_id=str(user.account_id),
        scope=user.roles,
    )
