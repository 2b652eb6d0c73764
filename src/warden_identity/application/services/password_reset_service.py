import logging
import secrets
from datetime import timedelta
from uuid import UUID

from warden_auth import (
    HashingError,
    InvalidCredentialsError,
    PasswordHasher,
    validate_input,
)
from warden_identity.application.email_templates import (
    PASSWORD_RESET_SUBJECT,
    PASSWORD_RESET_TEMPLATE,
)
from warden_identity.application.notifications import NotificationDispatcher
from warden_identity.application.ports import EmailMessage
from warden_identity.application.results import RecoveryResult, ResetRequestResult
from warden_identity.domain import UpdateResult, User, UserRepository
from warden_identity.domain.shared import utc_now
from warden_identity.exceptions import (
    SamePasswordError,
    TokenNotFoundError,
    UserNotFoundError,
)
from warden_identity.schemas import ChangePasswordRequest, RecoverRequest, ResetRequest

logger = logging.getLogger(__name__)


class PasswordResetService:
    """Service for password reset requests, recovery and password changes.

    A reset token lives on the user record as its pending reset. Requesting
    a new one replaces the old one, and a successful recovery or password
    change clears it, so each token works at most once.
    """

    DEFAULT_TOKEN_BYTES = 20

    def __init__(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        notifications: NotificationDispatcher,
        token_bytes: int = DEFAULT_TOKEN_BYTES,
        token_ttl: timedelta | None = None,
    ):
        self._user_repo = user_repository
        self._password_hasher = password_hasher
        self._notifications = notifications
        self._token_bytes = token_bytes
        self._token_ttl = token_ttl

    async def request_reset(self, username_or_email: str) -> ResetRequestResult:
        request = validate_input(ResetRequest, {"username_or_email": username_or_email})
        value = request.username_or_email

        user = await self._user_repo.find_by_login(value, value)
        if user is None:
            logger.info("Password reset requested for unknown user: %s", value)
            raise UserNotFoundError

        pending = user.start_password_reset(secrets.token_hex(self._token_bytes))
        update_result = await self._user_repo.update(user.id, {"pending_reset": pending})

        self._notifications.dispatch(
            EmailMessage(
                to=user.email,
                subject=PASSWORD_RESET_SUBJECT,
                template=PASSWORD_RESET_TEMPLATE,
                context={"username": user.username, "token": pending.token},
            ),
        )

        logger.info("Password reset requested for user: %s", user.id)
        return ResetRequestResult(user=user, update_result=update_result)

    async def recover(self, token: str, password: str) -> RecoveryResult:
        request = validate_input(RecoverRequest, {"token": token, "password": password})

        user = await self._user_repo.find_by_reset_token(request.token)
        if user is None:
            raise TokenNotFoundError

        if user.pending_reset and user.pending_reset.is_expired(utc_now(), self._token_ttl):
            logger.info("Expired password reset token used for user: %s", user.id)
            raise TokenNotFoundError

        update_result = await self._store_new_password(user, request.password)

        logger.info("Password recovered for user: %s", user.id)
        return RecoveryResult(user=user, update_result=update_result)

    async def change_password(
        self,
        user_id: UUID,
        old_password: str,
        password: str,
    ) -> UpdateResult:
        request = validate_input(
            ChangePasswordRequest,
            {"user_id": user_id, "old_password": old_password, "password": password},
        )

        user = await self._user_repo.find_by_id(request.user_id)
        if user is None:
            raise UserNotFoundError

        if not await self._password_hasher.verify(
            request.old_password,
            user.salt,
            user.password_hash,
        ):
            msg = "Invalid password!"
            raise InvalidCredentialsError(msg)

        update_result = await self._store_new_password(user, request.password)

        logger.info("Password changed for user: %s", user.id)
        return update_result

    async def _store_new_password(self, user: User, password: str) -> UpdateResult:
        """Hash with the user's own salt, refuse the current password, clear any reset.

        Resubmitting the current password is reported as such even when it
        no longer meets the strength rules.
        """
        try:
            new_hash = await self._password_hasher.hash(password, user.salt)
        except HashingError:
            # over-long input cannot be hashed; report it as a weak password
            self._password_hasher.validate_strength(password)
            raise
        if self._password_hasher.hashes_match(new_hash, user.password_hash):
            raise SamePasswordError
        self._password_hasher.validate_strength(password)

        update_result = await self._user_repo.update(
            user.id,
            {"password_hash": new_hash, "pending_reset": None},
        )
        user.set_password_hash(new_hash)
        user.clear_pending_reset()
        return update_result
