"""Unit tests for PasswordResetService."""

import re
from datetime import timedelta
from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from warden_auth import HashingError, PasswordHasher
from warden_identity import (
    InvalidCredentialsError,
    SamePasswordError,
    TokenNotFoundError,
    UpdateResult,
    UserNotFoundError,
    WeakPasswordError,
)
from warden_identity.application.email_templates import PASSWORD_RESET_SUBJECT
from warden_identity.application.notifications import NotificationDispatcher
from warden_identity.application.services import PasswordResetService
from warden_identity.domain.shared import utc_now

TEST_TOKEN = "test-token-abc123"
TEST_NEW_PASSWORD = "new_secure_password_123"
OLD_HASH = "$2b$04$oldhash"
NEW_HASH = "$2b$04$newhash"
ONE_MODIFIED = UpdateResult(matched_count=1, modified_count=1)


class _ResetTestCase:
    token_ttl = None

    def setup_method(self):
        """Set up test fixtures."""
        self.user_repo = AsyncMock()
        self.user_repo.update.return_value = ONE_MODIFIED
        self.password_hasher = Mock(spec=PasswordHasher)
        self.password_hasher.hash.return_value = NEW_HASH
        self.password_hasher.hashes_match.side_effect = lambda a, b: a == b
        self.password_hasher.verify.return_value = True
        self.notifications = Mock(spec=NotificationDispatcher)

        self.service = PasswordResetService(
            user_repository=self.user_repo,
            password_hasher=self.password_hasher,
            notifications=self.notifications,
            token_ttl=self.token_ttl,
        )

    @staticmethod
    def _with_credentials(user):
        user.assign_salt("$2b$04$abcdefghijklmnopqrstuu")
        user.set_password_hash(OLD_HASH)
        return user


class TestRequestReset(_ResetTestCase):
    """Tests for request_reset."""

    @pytest.mark.asyncio
    async def test_request_reset_success(self, test_user):
        """Successfully requests a password reset."""
        self.user_repo.find_by_login.return_value = test_user

        result = await self.service.request_reset("alice@example.com")

        assert result.user is test_user
        assert result.update_result == ONE_MODIFIED
        pending = test_user.pending_reset
        assert re.fullmatch(r"[0-9a-f]{40}", pending.token)
        self.user_repo.find_by_login.assert_called_once_with(
            "alice@example.com",
            "alice@example.com",
        )
        self.user_repo.update.assert_called_once_with(
            test_user.id,
            {"pending_reset": pending},
        )

    @pytest.mark.asyncio
    async def test_request_reset_sends_token_by_email(self, test_user):
        self.user_repo.find_by_login.return_value = test_user

        await self.service.request_reset("alice")

        message = self.notifications.dispatch.call_args[0][0]
        assert message.to == "alice@example.com"
        assert message.subject == PASSWORD_RESET_SUBJECT
        assert message.context["token"] == test_user.pending_reset.token

    @pytest.mark.asyncio
    async def test_new_request_replaces_previous_token(self, test_user):
        self.user_repo.find_by_login.return_value = test_user

        await self.service.request_reset("alice")
        first = test_user.pending_reset.token
        await self.service.request_reset("alice")

        assert test_user.pending_reset.token != first

    @pytest.mark.asyncio
    async def test_request_reset_unknown_user(self):
        self.user_repo.find_by_login.return_value = None

        with pytest.raises(UserNotFoundError):
            await self.service.request_reset("unknown@example.com")

        self.user_repo.update.assert_not_called()
        self.notifications.dispatch.assert_not_called()


class TestRecover(_ResetTestCase):
    """Tests for recover."""

    @pytest.mark.asyncio
    async def test_recover_success(self, test_user):
        user = self._with_credentials(test_user)
        user.start_password_reset(TEST_TOKEN)
        self.user_repo.find_by_reset_token.return_value = user

        result = await self.service.recover(TEST_TOKEN, TEST_NEW_PASSWORD)

        self.password_hasher.hash.assert_called_once_with(TEST_NEW_PASSWORD, user.salt)
        self.user_repo.update.assert_called_once_with(
            user.id,
            {"password_hash": NEW_HASH, "pending_reset": None},
        )
        assert result.update_result == ONE_MODIFIED
        assert result.user.pending_reset is None
        assert result.user.password_hash == NEW_HASH

    @pytest.mark.asyncio
    async def test_recover_unknown_token(self):
        self.user_repo.find_by_reset_token.return_value = None

        with pytest.raises(TokenNotFoundError, match="Token not found!"):
            await self.service.recover(TEST_TOKEN, TEST_NEW_PASSWORD)

    @pytest.mark.asyncio
    async def test_recover_same_password(self, test_user):
        user = self._with_credentials(test_user)
        user.start_password_reset(TEST_TOKEN)
        self.user_repo.find_by_reset_token.return_value = user
        self.password_hasher.hash.return_value = OLD_HASH

        with pytest.raises(SamePasswordError, match="You can't use the same password!"):
            await self.service.recover(TEST_TOKEN, "the old password")

        self.user_repo.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_recover_weak_password(self, test_user):
        user = self._with_credentials(test_user)
        self.user_repo.find_by_reset_token.return_value = user
        self.password_hasher.validate_strength.side_effect = WeakPasswordError("short")

        with pytest.raises(WeakPasswordError):
            await self.service.recover(TEST_TOKEN, "short")

        self.user_repo.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_recover_current_password_below_new_minimum(self, test_user):
        """Resubmitting the stored password is a same-password error first."""
        user = self._with_credentials(test_user)
        self.user_repo.find_by_reset_token.return_value = user
        self.password_hasher.hash.return_value = OLD_HASH
        self.password_hasher.validate_strength.side_effect = WeakPasswordError("short")

        with pytest.raises(SamePasswordError):
            await self.service.recover(TEST_TOKEN, "old-pw")

        self.user_repo.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_recover_unhashable_password_is_weak(self, test_user):
        user = self._with_credentials(test_user)
        self.user_repo.find_by_reset_token.return_value = user
        self.password_hasher.hash.side_effect = HashingError("too long")
        self.password_hasher.validate_strength.side_effect = WeakPasswordError("long")

        with pytest.raises(WeakPasswordError):
            await self.service.recover(TEST_TOKEN, "x" * 100)

    @pytest.mark.asyncio
    async def test_old_token_never_expires_without_ttl(self, test_user):
        user = self._with_credentials(test_user)
        user.start_password_reset(TEST_TOKEN, at=utc_now() - timedelta(days=400))
        self.user_repo.find_by_reset_token.return_value = user

        await self.service.recover(TEST_TOKEN, TEST_NEW_PASSWORD)

        self.user_repo.update.assert_called_once()


class TestRecoverWithTTL(_ResetTestCase):
    """Tests for recover when reset tokens expire."""

    token_ttl = timedelta(hours=1)

    @pytest.mark.asyncio
    async def test_expired_token_is_not_found(self, test_user):
        user = self._with_credentials(test_user)
        user.start_password_reset(TEST_TOKEN, at=utc_now() - timedelta(hours=2))
        self.user_repo.find_by_reset_token.return_value = user

        with pytest.raises(TokenNotFoundError):
            await self.service.recover(TEST_TOKEN, TEST_NEW_PASSWORD)

        self.user_repo.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_fresh_token_still_works(self, test_user):
        user = self._with_credentials(test_user)
        user.start_password_reset(TEST_TOKEN)
        self.user_repo.find_by_reset_token.return_value = user

        await self.service.recover(TEST_TOKEN, TEST_NEW_PASSWORD)

        self.user_repo.update.assert_called_once()


class TestChangePassword(_ResetTestCase):
    """Tests for change_password."""

    @pytest.mark.asyncio
    async def test_change_password_success(self, test_user):
        user = self._with_credentials(test_user)
        user.start_password_reset(TEST_TOKEN)
        self.user_repo.find_by_id.return_value = user

        result = await self.service.change_password(user.id, "old password", TEST_NEW_PASSWORD)

        assert result == ONE_MODIFIED
        self.password_hasher.verify.assert_called_once_with("old password", user.salt, OLD_HASH)
        self.user_repo.update.assert_called_once_with(
            user.id,
            {"password_hash": NEW_HASH, "pending_reset": None},
        )

    @pytest.mark.asyncio
    async def test_change_password_unknown_user(self):
        self.user_repo.find_by_id.return_value = None

        with pytest.raises(UserNotFoundError):
            await self.service.change_password(uuid4(), "old password", TEST_NEW_PASSWORD)

    @pytest.mark.asyncio
    async def test_change_password_wrong_old_password(self, test_user):
        self.user_repo.find_by_id.return_value = self._with_credentials(test_user)
        self.password_hasher.verify.return_value = False

        with pytest.raises(InvalidCredentialsError, match="Invalid password!"):
            await self.service.change_password(test_user.id, "wrong", TEST_NEW_PASSWORD)

        self.user_repo.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_change_to_same_password(self, test_user):
        self.user_repo.find_by_id.return_value = self._with_credentials(test_user)
        self.password_hasher.hash.return_value = OLD_HASH

        with pytest.raises(SamePasswordError):
            await self.service.change_password(test_user.id, "same", "same password")

    @pytest.mark.asyncio
    async def test_change_to_same_password_below_new_minimum(self, test_user):
        self.user_repo.find_by_id.return_value = self._with_credentials(test_user)
        self.password_hasher.hash.return_value = OLD_HASH
        self.password_hasher.validate_strength.side_effect = WeakPasswordError("short")

        with pytest.raises(SamePasswordError):
            await self.service.change_password(test_user.id, "old-pw", "old-pw")

        self.user_repo.update.assert_not_called()
