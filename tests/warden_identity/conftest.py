"""
Pytest configuration for warden_identity tests.

Provides user and account fixtures in the states the access gate and
the flows care about.
"""

import pytest

from warden_identity.domain import Account, AccountLabel, User


@pytest.fixture
def confirmed_account() -> Account:
    """An active, confirmed account."""
    return Account.create(labels=[AccountLabel.IS_ACTIVE, AccountLabel.IS_CONFIRMED])


@pytest.fixture
def test_user(confirmed_account) -> User:
    """Create a standard test user owned by ``confirmed_account``."""
    return User.create(
        account_id=confirmed_account.id,
        username="alice",
        email="alice@example.com",
    )
