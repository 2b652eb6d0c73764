"""SQLAlchemy implementation of AccountRepository."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from warden_identity.domain import Account, AccountRepository
from warden_identity.domain.shared import ensure_tz_aware
from warden_identity.exceptions import NotFoundError
from warden_identity.infrastructure.persistence.sqlalchemy.models import AccountModel

logger = logging.getLogger(__name__)


class AccountRepositorySQLAlchemy(AccountRepository):
    """SQLAlchemy implementation of the AccountRepository interface."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_by_id(self, account_id: UUID) -> Account | None:
        model = await self._find_model_by_id(account_id)
        return self._map_to_domain(model) if model else None

    async def create(self, account: Account) -> Account:
        model = AccountModel(
            id=account.id,
            labels=sorted(account.labels),
            created_at=account.created_at,
            updated_at=account.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        logger.info("Created account: %s", account.id)
        return account

    async def replace(self, account: Account) -> Account:
        model = await self._find_model_by_id(account.id)
        if model is None:
            msg = "Account not found!"
            raise NotFoundError(msg)
        model.labels = sorted(account.labels)
        model.updated_at = account.updated_at
        await self._session.flush()
        logger.debug("Replaced account: %s", account.id)
        return account

    async def delete(self, account_id: UUID) -> bool:
        model = await self._find_model_by_id(account_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        logger.info("Deleted account: %s", account_id)
        return True

    async def _find_model_by_id(self, account_id: UUID) -> AccountModel | None:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: AccountModel) -> Account:
        return Account.reconstitute(
            id=model.id,
            labels=model.labels,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )
