"""Session token service.

Signs and decodes compact JWTs (three-part JWS) with PyJWT. The signing
configuration is an immutable ``TokenSettings`` handed over once at
construction.
"""

import logging
from datetime import datetime, timezone
from typing import Any

import jwt

from warden_auth.exceptions import InvalidTokenError
from warden_auth.schemas import (
    TokenClaims,
    TokenOptions,
    TokenPayload,
    TokenSettings,
    validate_input,
)

logger = logging.getLogger(__name__)


class TokenIssuer:
    """Service for session token creation and verification.

    Examples
    --------
    >>> issuer = TokenIssuer(TokenSettings(signing_key="your-secret-key"))
    >>> token = issuer.issue({"id": "42", "username": "alice"})
    >>> issuer.decode(token).subject
    '42'
    """

    def __init__(self, settings: TokenSettings):
        if not settings.signing_key:
            msg = "JWT signing key cannot be empty"
            raise ValueError(msg)
        if not settings.algorithm.startswith("HS") and not settings.verification_key:
            msg = f"{settings.algorithm} needs a public verification key"
            raise ValueError(msg)
        self._settings = settings

    @property
    def settings(self) -> TokenSettings:
        return self._settings

    def issue(
        self,
        claims: TokenClaims | dict[str, Any],
        options: TokenOptions | None = None,
    ) -> str:
        """Sign a token for the given claims.

        Parameters
        ----------
        claims
            ``TokenClaims`` or a mapping validated into one
        options
            Overrides for expiry, algorithm and issuer

        Returns
        -------
        The encoded JWT token string

        Raises
        ------
        ValidationError
            If the claims miss ``id`` or ``username`` or carry unknown keys
        """
        if not isinstance(claims, TokenClaims):
            claims = validate_input(TokenClaims, claims)
        options = options or TokenOptions()

        now = datetime.now(tz=timezone.utc)
        expires_in = (
            options.expires_in
            if options.expires_in is not None
            else self._settings.expires_in
        )
        issuer = options.issuer or self._settings.issuer

        payload: dict[str, Any] = {
            "sub": claims.id,
            "username": claims.username,
            "scope": list(claims.scope),
            "iat": now,
            "exp": now + expires_in,
        }
        if claims.account_id is not None:
            payload["account_id"] = claims.account_id
        if issuer:
            payload["iss"] = issuer

        return jwt.encode(
            payload,
            self._settings.signing_key,
            algorithm=options.algorithm or self._settings.algorithm,
        )

    def decode(self, token: str, algorithms: list[str] | None = None) -> TokenPayload:
        """Verify and decode a token.

        Raises
        ------
        InvalidTokenError
            If token is invalid, expired, or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.decode_key,
                algorithms=algorithms or [self._settings.algorithm],
                issuer=self._settings.issuer,
                options={"require": ["exp", "sub"]},
            )

            return TokenPayload(
                subject=payload["sub"],
                username=payload["username"],
                account_id=payload.get("account_id"),
                scope=tuple(payload.get("scope") or ()),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                issued_at=(
                    datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
                    if "iat" in payload
                    else None
                ),
            )

        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e
