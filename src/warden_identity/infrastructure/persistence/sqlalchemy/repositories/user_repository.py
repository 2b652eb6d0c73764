"""SQLAlchemy implementation of UserRepository."""

import logging
from collections.abc import Mapping
from typing import Any, NoReturn
from uuid import UUID

from sqlalchemy import and_, case, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from warden_auth import PasswordHasher
from warden_identity.domain import (
    Email,
    LinkedIdentity,
    PendingReset,
    UpdateResult,
    User,
)
from warden_identity.domain.shared import ensure_tz_aware, utc_now
from warden_identity.domain.user import UserRepository
from warden_identity.exceptions import (
    EmailTakenError,
    UsernameTakenError,
    UserNotFoundError,
)
from warden_identity.infrastructure.persistence.sqlalchemy.models import (
    LinkedIdentityModel,
    UserModel,
)

logger = logging.getLogger(__name__)


def _aware(value):
    return ensure_tz_aware(value) if value is not None else None


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface.

    Writes are flushed but never committed; the caller owns the
    transaction. A unique-constraint violation rolls the session back,
    which also discards an account created earlier in the same signup.
    """

    def __init__(self, session: AsyncSession, password_hasher: PasswordHasher) -> None:
        super().__init__(password_hasher)
        self._session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        model = await self._find_model_by_id(user_id)
        return self._map_to_domain(model) if model else None

    async def find_by_login(self, username: str, email: str) -> User | None:
        username_match = UserModel.username == username
        stmt = (
            select(UserModel)
            .where(or_(username_match, UserModel.email == Email.canonical(email)))
            .order_by(case((username_match, 0), else_=1))
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return self._map_to_domain(model) if model else None

    async def find_by_reset_token(self, token: str) -> User | None:
        stmt = select(UserModel).where(UserModel.reset_token == token)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def find_by_linked_identity(
        self,
        provider: str,
        external_id: str | None,
        email: str | None,
    ) -> User | None:
        conditions = []
        identity_match = None
        if external_id:
            identity_match = UserModel.linked_identities.any(
                and_(
                    LinkedIdentityModel.provider == provider,
                    LinkedIdentityModel.external_id == external_id,
                ),
            )
            conditions.append(identity_match)
        if email:
            conditions.append(UserModel.email == Email.canonical(email))
        if not conditions:
            return None

        stmt = select(UserModel).where(or_(*conditions)).limit(1)
        if identity_match is not None:
            stmt = stmt.order_by(case((identity_match, 0), else_=1))
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return self._map_to_domain(model) if model else None

    async def update(self, user_id: UUID, changes: Mapping[str, Any]) -> UpdateResult:
        self._check_update_fields(changes)

        model = await self._find_model_by_id(user_id)
        if model is None:
            return UpdateResult(matched_count=0, modified_count=0)

        modified = False
        for column, value in self._to_columns(changes).items():
            if getattr(model, column) != value:
                setattr(model, column, value)
                modified = True

        if modified:
            model.updated_at = utc_now()
        await self._session.flush()
        logger.debug("Updated user %s fields: %s", user_id, sorted(changes))
        return UpdateResult(matched_count=1, modified_count=int(modified))

    async def delete(self, user_id: UUID) -> bool:
        model = await self._find_model_by_id(user_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        logger.info("Deleted user: %s", user_id)
        return True

    async def _insert(self, user: User) -> User:
        model = self._map_to_model(user)
        self._session.add(model)
        await self._flush(user)
        logger.info("Created user: %s (username: %s)", user.id, user.username)
        return user

    async def _write(self, user: User) -> User:
        model = await self._find_model_by_id(user.id)
        if model is None:
            raise UserNotFoundError
        self._update_model(model, user)
        await self._flush(user)
        logger.debug("Replaced user: %s", user.id)
        return user

    async def _find_model_by_id(self, user_id: UUID) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _flush(self, user: User) -> None:
        try:
            await self._session.flush()
        except IntegrityError as e:
            await self._session.rollback()
            self._raise_conflict(e, user)

    @staticmethod
    def _raise_conflict(error: IntegrityError, user: User) -> NoReturn:
        detail = str(error.orig).lower()
        if "username" in detail:
            raise UsernameTakenError(user.username) from error
        if "email" in detail:
            raise EmailTakenError(user.email) from error
        raise error

    @staticmethod
    def _to_columns(changes: Mapping[str, Any]) -> dict[str, Any]:
        columns: dict[str, Any] = {}
        for key, value in changes.items():
            if key == "pending_reset":
                columns["reset_token"] = value.token if value else None
                columns["reset_at"] = value.reset_at if value else None
            elif key == "labels":
                columns["labels"] = sorted(value)
            elif key == "roles":
                columns["roles"] = list(value)
            else:
                columns[key] = value
        return columns

    def _map_to_domain(self, model: UserModel) -> User:
        pending_reset = None
        if model.reset_token:
            pending_reset = PendingReset(
                token=model.reset_token,
                reset_at=_aware(model.reset_at) or _aware(model.updated_at),
            )

        return User.reconstitute(
            id=model.id,
            account_id=model.account_id,
            username=model.username,
            email=model.email,
            password_hash=model.password_hash,
            salt=model.salt,
            roles=model.roles,
            labels=model.labels,
            title=model.title,
            first_name=model.first_name,
            last_name=model.last_name,
            pending_reset=pending_reset,
            last_login=_aware(model.last_login),
            linked_identities={
                identity.provider: LinkedIdentity(
                    provider=identity.provider,
                    external_id=identity.external_id,
                    email=identity.email,
                    display_name=identity.display_name,
                    token=identity.token,
                    expires_at=_aware(identity.expires_at),
                )
                for identity in model.linked_identities
            },
            created_at=_aware(model.created_at),
            updated_at=_aware(model.updated_at),
        )

    def _map_to_model(self, user: User) -> UserModel:
        model = UserModel(
            id=user.id,
            account_id=user.account_id,
            created_at=user.created_at,
            linked_identities=[],
        )
        self._update_model(model, user)
        return model

    def _update_model(self, model: UserModel, user: User) -> None:
        model.username = user.username
        model.email = user.email
        model.password_hash = user.password_hash
        model.salt = user.salt
        model.roles = user.roles
        model.labels = sorted(user.labels)
        model.title = user.title
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.reset_token = user.pending_reset.token if user.pending_reset else None
        model.reset_at = user.pending_reset.reset_at if user.pending_reset else None
        model.last_login = user.last_login
        model.updated_at = user.updated_at
        self._sync_identities(model, user.linked_identities)

    @staticmethod
    def _sync_identities(
        model: UserModel,
        identities: Mapping[str, LinkedIdentity],
    ) -> None:
        existing = {identity.provider: identity for identity in model.linked_identities}

        for provider, stored in existing.items():
            if provider not in identities:
                model.linked_identities.remove(stored)

        for provider, identity in identities.items():
            stored = existing.get(provider)
            if stored is None:
                stored = LinkedIdentityModel(provider=provider)
                model.linked_identities.append(stored)
            stored.external_id = identity.external_id
            stored.email = identity.email
            stored.display_name = identity.display_name
            stored.token = identity.token
            stored.expires_at = identity.expires_at
