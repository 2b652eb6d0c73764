"""Identity request schemas.

pydantic models validating the inputs of the identity services before
any repository is touched. Services go through
``warden_auth.validate_input`` so a malformed request surfaces as
``ValidationError``.
"""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Username (or email) and password of a login attempt."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SignupRequest(BaseModel):
    """A new user and its profile fields.

    Only the listed profile fields are accepted; anything else (labels,
    roles, hashes) is rejected instead of being written to the record.
    """

    model_config = ConfigDict(extra="forbid")

    username: str = Field(..., min_length=1, max_length=150)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)
    title: str | None = Field(default=None, max_length=50)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)


class SocialProfile(BaseModel):
    """Profile returned by a third-party identity provider.

    Accepts both ``display_name`` and the provider-style ``displayName``.
    ``raw`` keeps the provider's untouched payload for normalization.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str | None = None
    email: str | None = None
    display_name: str | None = Field(default=None, alias="displayName")
    raw: dict[str, Any] = Field(default_factory=dict)


class SocialLoginRequest(BaseModel):
    provider: str = Field(..., min_length=1)
    token: str = Field(..., min_length=1)
    expires_in: int = Field(..., ge=0, description="Provider token lifetime in seconds")
    profile: SocialProfile


class ResetRequest(BaseModel):
    username_or_email: str = Field(..., min_length=1)


class RecoverRequest(BaseModel):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ChangePasswordRequest(BaseModel):
    user_id: UUID
    old_password: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
