"""Unit tests for AccessGate."""

import pytest

from warden_identity.domain import AccessGate, Account, AccountLabel, UserLabel
from warden_identity.exceptions import (
    AccessDenialReason,
    AccessDeniedError,
    UserNotFoundError,
)


class TestAccessGate:
    """Tests for the ordered status checks."""

    def setup_method(self):
        """Set up test fixtures."""
        self.gate = AccessGate()

    def test_active_user_and_confirmed_account_pass(self, test_user, confirmed_account):
        assert self.gate.can_authenticate(test_user, confirmed_account) is confirmed_account

    def test_missing_account(self, test_user):
        with pytest.raises(AccessDeniedError) as exc_info:
            self.gate.can_authenticate(test_user, None)

        assert exc_info.value.reason is AccessDenialReason.ACCOUNT_MISSING
        assert exc_info.value.message == "Unable to find user account!"

    def test_deleted_user_looks_unknown(self, test_user, confirmed_account):
        """A deleted user gets the same error as a user that never existed."""
        test_user.mark_deleted()

        with pytest.raises(UserNotFoundError, match="User not found!"):
            self.gate.can_authenticate(test_user, confirmed_account)

    def test_inactive_user(self, test_user, confirmed_account):
        test_user.remove_label(UserLabel.IS_ACTIVE)

        with pytest.raises(AccessDeniedError, match="User is not active!") as exc_info:
            self.gate.can_authenticate(test_user, confirmed_account)

        assert exc_info.value.reason is AccessDenialReason.USER_INACTIVE

    def test_unconfirmed_account(self, test_user):
        account = Account.create()

        with pytest.raises(AccessDeniedError, match="Account is not confirmed!") as exc_info:
            self.gate.can_authenticate(test_user, account)

        assert exc_info.value.reason is AccessDenialReason.ACCOUNT_UNCONFIRMED

    def test_inactive_account(self, test_user):
        account = Account.create(labels=[AccountLabel.IS_CONFIRMED])

        with pytest.raises(AccessDeniedError, match="Account is not active!") as exc_info:
            self.gate.can_authenticate(test_user, account)

        assert exc_info.value.reason is AccessDenialReason.ACCOUNT_INACTIVE

    def test_missing_account_checked_before_deleted_user(self, test_user):
        test_user.mark_deleted()

        with pytest.raises(AccessDeniedError):
            self.gate.can_authenticate(test_user, None)

    def test_deleted_checked_before_inactive(self, test_user, confirmed_account):
        test_user.remove_label(UserLabel.IS_ACTIVE)
        test_user.mark_deleted()

        with pytest.raises(UserNotFoundError):
            self.gate.can_authenticate(test_user, confirmed_account)

    def test_inactive_user_checked_before_unconfirmed_account(self, test_user):
        test_user.remove_label(UserLabel.IS_ACTIVE)

        with pytest.raises(AccessDeniedError) as exc_info:
            self.gate.can_authenticate(test_user, Account.create(labels=[]))

        assert exc_info.value.reason is AccessDenialReason.USER_INACTIVE

    def test_unconfirmed_checked_before_inactive_account(self, test_user):
        with pytest.raises(AccessDeniedError) as exc_info:
            self.gate.can_authenticate(test_user, Account.create(labels=[]))

        assert exc_info.value.reason is AccessDenialReason.ACCOUNT_UNCONFIRMED


class TestAccount:
    """Tests for the Account aggregate."""

    def test_new_account_is_active_and_unconfirmed(self):
        account = Account.create()

        assert account.is_active is True
        assert account.is_confirmed is False

    def test_confirm_and_deactivate(self):
        account = Account.create()

        account.confirm()
        account.deactivate()

        assert account.is_confirmed is True
        assert account.is_active is False
