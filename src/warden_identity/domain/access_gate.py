"""Status gating for password logins.

Decides from labels alone whether a user and its owning account may
authenticate. Runs before any password check.
"""

import logging

from warden_identity.domain.account import Account, AccountLabel
from warden_identity.domain.user import User, UserLabel
from warden_identity.exceptions import (
    AccessDenialReason,
    AccessDeniedError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


class AccessGate:
    """Evaluates whether a (user, account) pair may authenticate.

    Checks run in a fixed order and the first failing check decides the
    error the caller sees:

    1. the account exists
    2. the user is not soft-deleted (reported as ``UserNotFoundError``,
       indistinguishable from an unknown user)
    3. the user is active
    4. the account is confirmed
    5. the account is active
    """

    def can_authenticate(self, user: User, account: Account | None) -> Account:
        """Return ``account`` if the pair may log in.

        Raises
        ------
        AccessDeniedError
            With the reason of the first failing status check
        UserNotFoundError
            If the user carries the ``isDeleted`` label
        """
        if account is None:
            logger.warning("Login refused, account missing for user %s", user.id)
            raise AccessDeniedError(AccessDenialReason.ACCOUNT_MISSING)

        if user.has_label(UserLabel.IS_DELETED):
            logger.info("Login refused, user %s is deleted", user.id)
            raise UserNotFoundError

        if not user.has_label(UserLabel.IS_ACTIVE):
            logger.info("Login refused, user %s is not active", user.id)
            raise AccessDeniedError(AccessDenialReason.USER_INACTIVE)

        if not account.has_label(AccountLabel.IS_CONFIRMED):
            logger.info("Login refused, account %s is not confirmed", account.id)
            raise AccessDeniedError(AccessDenialReason.ACCOUNT_UNCONFIRMED)

        if not account.has_label(AccountLabel.IS_ACTIVE):
            logger.info("Login refused, account %s is not active", account.id)
            raise AccessDeniedError(AccessDenialReason.ACCOUNT_INACTIVE)

        return account
