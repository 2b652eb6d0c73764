"""Password hashing service using bcrypt.

Unlike a self-salting ``hashpw(password, gensalt())`` scheme, every user
owns a salt that is generated once at creation and reused for every
later hash of that user's password. Hashing the same plaintext with the
same salt is therefore deterministic, which is what lets the reset and
change flows detect "new password equals old password".
"""

import asyncio
import hmac
import logging

import bcrypt

from warden_auth.exceptions import HashingError, WeakPasswordError

logger = logging.getLogger(__name__)


class PasswordHasher:
    """Service for salted password hashing and verification.

    Examples
    --------
    >>> hasher = PasswordHasher(rounds=4)
    >>> salt = hasher.generate_salt()
    >>> hashed = await hasher.hash("my_secure_password", salt)
    >>> await hasher.verify("my_secure_password", salt, hashed)
    True
    """

    DEFAULT_ROUNDS = 10
    DEFAULT_MIN_LENGTH = 8
    # bcrypt silently ignores (or, in recent releases, rejects) input past 72 bytes
    MAX_BYTES = 72

    def __init__(
        self,
        rounds: int = DEFAULT_ROUNDS,
        min_length: int = DEFAULT_MIN_LENGTH,
    ):
        """Initialize the password hasher.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations) used for new salts.
        min_length
            Minimum number of characters accepted for a new password.
        """
        self._rounds = rounds
        self._min_length = min_length

    @property
    def rounds(self) -> int:
        return self._rounds

    def generate_salt(self) -> str:
        """Generate a new per-user salt at the configured cost factor."""
        return bcrypt.gensalt(rounds=self._rounds).decode("ascii")

    async def hash(self, password: str, salt: str) -> str:
        """Hash a plaintext password with the given salt.

        The bcrypt primitive runs in a worker thread so the event loop
        stays responsive.

        Raises
        ------
        HashingError
            If bcrypt rejects the salt or the password
        """
        try:
            hashed = await asyncio.to_thread(
                bcrypt.hashpw,
                password.encode("utf-8"),
                salt.encode("ascii"),
            )
        except (ValueError, TypeError, AttributeError, UnicodeError) as e:
            logger.error("bcrypt failed to hash password: %s", e)
            raise HashingError(f"Password hashing failed: {e}") from e
        return hashed.decode("ascii")

    async def verify(self, password: str, salt: str, expected_hash: str | None) -> bool:
        """Check ``password`` against a stored hash.

        Hash-then-compare with a constant-time comparison. A user without
        a stored hash never verifies.
        """
        if not expected_hash:
            return False
        return self.hashes_match(await self.hash(password, salt), expected_hash)

    @staticmethod
    def hashes_match(hashed: str, expected_hash: str | None) -> bool:
        """Constant-time equality of two stored hashes."""
        if not expected_hash:
            return False
        return hmac.compare_digest(hashed.encode("utf-8"), expected_hash.encode("utf-8"))

    def validate_strength(self, password: str) -> None:
        """Validate that a new password meets strength requirements.

        Raises
        ------
        WeakPasswordError
            If password is empty, too short or too long for bcrypt
        """
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < self._min_length:
            msg = f"Password must be at least {self._min_length} characters"
            raise WeakPasswordError(msg)

        if len(password.encode("utf-8")) > self.MAX_BYTES:
            msg = f"Password cannot exceed {self.MAX_BYTES} bytes"
            raise WeakPasswordError(msg)
