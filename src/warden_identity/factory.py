"""Wiring of the identity services from application settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from warden_auth import PasswordHasher, TokenIssuer, TokenSettings
from warden_config import Settings, get_settings
from warden_identity.application.notifications import NotificationDispatcher
from warden_identity.application.ports import Mailer
from warden_identity.application.services import (
    AuthenticationService,
    PasswordResetService,
)
from warden_identity.domain import AccessGate
from warden_identity.infrastructure.email import SMTPMailer
from warden_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)


def token_settings_from(settings: Settings) -> TokenSettings:
    """Translate the JWT_* settings into ``TokenSettings``."""
    verification_key = None
    if settings.jwt_is_asymmetric and settings.jwt_public_key is not None:
        verification_key = settings.jwt_public_key.get_secret_value()

    return TokenSettings(
        signing_key=settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        expires_in=timedelta(seconds=settings.jwt_expire_seconds),
        issuer=settings.jwt_issuer,
        verification_key=verification_key,
    )


def password_hasher_from(settings: Settings) -> PasswordHasher:
    return PasswordHasher(
        rounds=settings.password_salt_rounds,
        min_length=settings.password_min_length,
    )


@dataclass
class IdentityServices:
    """
    The identity services bound to one database session.

    Build one per unit of work; commit or roll back the session when the
    operation is done. ``notifications`` is exposed so callers (and
    tests) can wait for outstanding email deliveries.
    """

    authentication: AuthenticationService
    password_reset: PasswordResetService
    user_repository: UserRepositorySQLAlchemy
    account_repository: AccountRepositorySQLAlchemy
    token_issuer: TokenIssuer
    notifications: NotificationDispatcher

    @classmethod
    def build(
        cls,
        session: AsyncSession,
        settings: Settings | None = None,
        mailer: Mailer | None = None,
        notifications: NotificationDispatcher | None = None,
    ) -> IdentityServices:
        """
        Assemble the services.

        Parameters
        ----------
        session
            Session shared by both repositories
        settings
            Application settings; defaults to ``get_settings()``
        mailer
            Email transport; defaults to ``SMTPMailer``
        notifications
            Dispatcher to reuse across sessions; a new one wraps
            ``mailer`` when omitted
        """
        settings = settings or get_settings()

        password_hasher = password_hasher_from(settings)
        token_issuer = TokenIssuer(token_settings_from(settings))
        if notifications is None:
            notifications = NotificationDispatcher(mailer or SMTPMailer(settings))

        user_repo = UserRepositorySQLAlchemy(session, password_hasher)
        account_repo = AccountRepositorySQLAlchemy(session)

        ttl_minutes = settings.password_reset_token_ttl_minutes
        token_ttl = timedelta(minutes=ttl_minutes) if ttl_minutes else None

        logger.debug(
            "Identity services built (algorithm=%s, reset ttl=%s)",
            settings.jwt_algorithm,
            token_ttl,
        )
        return cls(
            authentication=AuthenticationService(
                user_repository=user_repo,
                account_repository=account_repo,
                password_hasher=password_hasher,
                token_issuer=token_issuer,
                notifications=notifications,
                access_gate=AccessGate(),
            ),
            password_reset=PasswordResetService(
                user_repository=user_repo,
                password_hasher=password_hasher,
                notifications=notifications,
                token_bytes=settings.password_reset_token_bytes,
                token_ttl=token_ttl,
            ),
            user_repository=user_repo,
            account_repository=account_repo,
            token_issuer=token_issuer,
            notifications=notifications,
        )
