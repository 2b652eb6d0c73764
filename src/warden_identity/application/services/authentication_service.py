"""Authentication service for signup, login and session tokens."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import timedelta
from typing import TYPE_CHECKING, Any
from uuid import UUID

from warden_auth import (
    InvalidCredentialsError,
    InvalidTokenError,
    PasswordHasher,
    TokenIssuer,
    TokenOptions,
    TokenPayload,
    validate_input,
)
from warden_identity.application.email_templates import WELCOME_SUBJECT, WELCOME_TEMPLATE
from warden_identity.application.notifications import NotificationDispatcher
from warden_identity.application.ports import EmailMessage
from warden_identity.application.results import LoginResult, SignupResult
from warden_identity.application.social_profiles import normalize_profile
from warden_identity.domain import (
    AccessGate,
    Account,
    Email,
    LinkedIdentity,
    UpdateResult,
    User,
)
from warden_identity.domain.shared import utc_now
from warden_identity.exceptions import (
    EmailTakenError,
    NotFoundError,
    UsernameTakenError,
    UserNotFoundError,
)
from warden_identity.schemas import (
    LoginRequest,
    SignupRequest,
    SocialLoginRequest,
    SocialProfile,
)
from warden_identity.serializers import dump_account, dump_user, token_claims

if TYPE_CHECKING:
    from warden_identity.domain import AccountRepository, UserRepository

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates the warden_auth primitives (password hashing, JWT tokens)
    with the User and Account aggregates to provide:
    - Signup (account + user, welcome email)
    - Password login, gated by user and account status
    - Social login, linking a provider identity to an existing user
    - Session token validation

    Password login runs the AccessGate; social login deliberately does not.
    """

    def __init__(  # noqa: PLR0913
        self,
        user_repository: UserRepository,
        account_repository: AccountRepository,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
        notifications: NotificationDispatcher,
        access_gate: AccessGate | None = None,
    ):
        self._user_repo = user_repository
        self._account_repo = account_repository
        self._password_hasher = password_hasher
        self._token_issuer = token_issuer
        self._notifications = notifications
        self._access_gate = access_gate or AccessGate()

    def create_token(self, user: User, options: TokenOptions | None = None) -> str:
        return self._token_issuer.issue(token_claims(user), options)

    async def login(self, username: str, password: str) -> LoginResult:
        """Log in with username or email and password.

        Raises
        ------
        UserNotFoundError
            If no user has this username or email, or the user is deleted
        AccessDeniedError
            If the user or its account may not log in
        InvalidCredentialsError
            If the password does not match
        """
        request = validate_input(LoginRequest, {"username": username, "password": password})

        user = await self._user_repo.find_by_login(request.username, request.username)
        if user is None:
            logger.info("Login failed, unknown user: %s", request.username)
            raise UserNotFoundError

        account = await self._account_repo.find_by_id(user.account_id)
        self._access_gate.can_authenticate(user, account)

        if not await self._password_hasher.verify(
            request.password,
            user.salt,
            user.password_hash,
        ):
            logger.info("Login failed, incorrect password for user: %s", user.id)
            raise InvalidCredentialsError

        result = await self._complete_login(user)
        logger.info("User logged in: %s", user.id)
        return result

    async def signup(
        self,
        username: str,
        email: str,
        password: str,
        **profile: Any,
    ) -> SignupResult:
        """Create an account and its first user.

        ``profile`` accepts ``title``, ``first_name`` and ``last_name``.

        Raises
        ------
        ValidationError
            If a field is missing or malformed, or the password is weak
        UsernameTakenError
            If the username is in use (checked before the email)
        EmailTakenError
            If the email is in use
        """
        request = validate_input(
            SignupRequest,
            {"username": username, "email": email, "password": password, **profile},
        )
        normalized_email = Email.parse(request.email).address
        self._password_hasher.validate_strength(request.password)

        existing = await self._user_repo.find_by_login(request.username, normalized_email)
        if existing is not None:
            if existing.username == request.username:
                raise UsernameTakenError(request.username)
            if existing.email == normalized_email:
                raise EmailTakenError(normalized_email)

        account = await self._account_repo.create(Account.create())
        user = User.create(
            account_id=account.id,
            username=request.username,
            email=normalized_email,
            title=request.title,
            first_name=request.first_name,
            last_name=request.last_name,
        )
        try:
            user = await self._user_repo.create(user, password=request.password)
        except Exception:
            logger.warning("User creation failed, removing orphaned account %s", account.id)
            await self._account_repo.delete(account.id)
            raise

        self._notifications.dispatch(
            EmailMessage(
                to=user.email,
                subject=WELCOME_SUBJECT,
                template=WELCOME_TEMPLATE,
                context={"username": user.username, "email": user.email},
            ),
        )

        logger.info("User signed up: %s (account: %s)", user.id, account.id)
        return SignupResult(user=dump_user(user), account=dump_account(account))

    async def social_login(
        self,
        provider: str,
        token: str,
        expires_in: int,
        profile: SocialProfile | Mapping[str, Any],
    ) -> LoginResult:
        """Link a provider identity to an existing user and log them in.

        The user is matched by the identity already linked for
        ``provider`` OR by email. No user is ever created here.

        Raises
        ------
        UserNotFoundError
            If no user matches the profile
        """
        request = validate_input(
            SocialLoginRequest,
            {
                "provider": provider,
                "token": token,
                "expires_in": expires_in,
                "profile": profile,
            },
        )
        normalized = normalize_profile(request.provider, request.profile)

        user = await self._user_repo.find_by_linked_identity(
            request.provider,
            normalized.id,
            normalized.email,
        )
        if user is None:
            logger.info("Social login failed, no user for %s profile", request.provider)
            raise UserNotFoundError

        user.link_identity(
            LinkedIdentity(
                provider=request.provider,
                external_id=normalized.id,
                email=normalized.email,
                display_name=normalized.display_name,
                token=request.token,
                expires_at=utc_now() + timedelta(seconds=request.expires_in),
            ),
        )

        result = await self._complete_login(user)
        logger.info("User logged in with %s: %s", request.provider, user.id)
        return result

    async def validate_credential(
        self,
        decoded: TokenPayload | Mapping[str, Any] | None,
    ) -> bool:
        """Accept a decoded token only if its subject still exists.

        Soft-deleted users count as gone, so their old tokens stop
        working without any revocation list.
        """
        return await self._load_subject(decoded) is not None

    async def authenticate_token(self, token: str) -> User:
        """Decode a session token and return the user it was issued for.

        Raises
        ------
        InvalidTokenError
            If the token is invalid, expired, or its user is gone
        """
        payload = self._token_issuer.decode(token)
        user = await self._load_subject(payload)
        if user is None:
            msg = "User not found"
            raise InvalidTokenError(msg)
        return user

    async def confirm_account(self, account_id: UUID) -> Account:
        account = await self._get_account(account_id)
        account.confirm()
        logger.info("Account confirmed: %s", account_id)
        return await self._account_repo.replace(account)

    async def deactivate_account(self, account_id: UUID) -> Account:
        account = await self._get_account(account_id)
        account.deactivate()
        logger.info("Account deactivated: %s", account_id)
        return await self._account_repo.replace(account)

    async def delete_user(self, user_id: UUID) -> UpdateResult:
        """Soft delete a user by labelling it ``isDeleted``."""
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError
        user.mark_deleted()
        logger.info("User deleted: %s", user_id)
        return await self._user_repo.update(user.id, {"labels": user.labels})

    async def _complete_login(self, user: User) -> LoginResult:
        user.record_login()
        updated = await self._user_repo.replace(user)
        return LoginResult(user=updated, token=self.create_token(updated))

    async def _get_account(self, account_id: UUID) -> Account:
        account = await self._account_repo.find_by_id(account_id)
        if account is None:
            msg = "Account not found!"
            raise NotFoundError(msg)
        return account

    async def _load_subject(
        self,
        decoded: TokenPayload | Mapping[str, Any] | None,
    ) -> User | None:
        if not decoded:
            return None

        if isinstance(decoded, TokenPayload):
            subject = decoded.subject
        else:
            subject = decoded.get("sub") or decoded.get("id")
        if not subject:
            return None

        try:
            user_id = UUID(str(subject))
        except ValueError:
            return None

        user = await self._user_repo.find_by_id(user_id)
        if user is None or user.is_deleted:
            return None
        return user
