from warden_identity.domain.account.aggregates.account import Account, AccountLabel

__all__ = ["Account", "AccountLabel"]
