"""Auth schemas and data structures.

Data classes used for transferring token data between components, plus
the pydantic models that validate token claims before signing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from warden_auth.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_input(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Validate ``data`` against ``model``.

    Raises
    ------
    ValidationError
        With the first error message and the full pydantic error list
    """
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        errors = e.errors(include_url=False)
        first = errors[0]
        location = ".".join(str(part) for part in first["loc"]) or model.__name__
        raise ValidationError(f"{location}: {first['msg']}", errors=errors) from e


class TokenClaims(BaseModel):
    """Custom claims embedded in a session token.

    ``id`` and ``username`` are required; ``scope`` defaults to no scopes.
    Unknown keys are rejected so nothing sensitive slips into a token.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    account_id: str | None = None
    scope: list[str] = Field(default_factory=list)


@dataclass(frozen=True)
class TokenSettings:
    """Immutable signing configuration, built once at service start.

    Attributes
    ----------
    signing_key
        Secret (HS*) or private key (RS*/ES*/EdDSA) used to sign tokens
    verification_key
        Public key, required for asymmetric algorithms; HS* algorithms
        verify with ``signing_key``
    algorithm
        JWS algorithm name
    expires_in
        Default token lifetime
    issuer
        Optional ``iss`` claim, checked on decode when set
    """

    signing_key: str
    algorithm: str = "HS256"
    expires_in: timedelta = timedelta(days=1)
    issuer: str | None = None
    verification_key: str | None = None

    @property
    def decode_key(self) -> str:
        return self.verification_key or self.signing_key


@dataclass(frozen=True)
class TokenOptions:
    """Per-call overrides of the service-wide token defaults."""

    expires_in: timedelta | None = None
    algorithm: str | None = None
    issuer: str | None = None


@dataclass(frozen=True)
class TokenPayload:
    """Decoded JWT token payload.

    Attributes
    ----------
    subject
        The user id the token was issued for (``sub``)
    username
        The user's username at issue time
    account_id
        The owning account id, if it was included
    scope
        Granted scopes (the user's roles)
    exp
        Token expiration timestamp
    issued_at
        Token creation timestamp
    """

    subject: str
    username: str
    exp: datetime
    issued_at: datetime | None = None
    account_id: str | None = None
    scope: tuple[str, ...] = field(default_factory=tuple)

    def is_expired(self) -> bool:
        """Check if the token has expired."""
        return datetime.now(tz=self.exp.tzinfo) > self.exp
