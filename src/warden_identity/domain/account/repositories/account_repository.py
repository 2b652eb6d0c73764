"""Account repository interface."""

from abc import ABC, abstractmethod
from uuid import UUID

from warden_identity.domain.account.aggregates import Account


class AccountRepository(ABC):
    """Repository interface for Account aggregates."""

    @abstractmethod
    async def find_by_id(self, account_id: UUID) -> Account | None:
        """Find an account by its ID."""

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Persist a new account."""

    @abstractmethod
    async def replace(self, account: Account) -> Account:
        """Overwrite the stored account with the full given state."""

    @abstractmethod
    async def delete(self, account_id: UUID) -> bool:
        """Physically remove an account. Only used to undo a failed signup."""
