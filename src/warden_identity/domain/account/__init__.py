"""Account domain: the owner records users belong to."""

from warden_identity.domain.account.aggregates import Account, AccountLabel
from warden_identity.domain.account.repositories import AccountRepository

__all__ = ["Account", "AccountLabel", "AccountRepository"]
