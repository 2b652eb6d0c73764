from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class PendingReset:
    """A single-use password reset token awaiting recovery."""

    token: str
    reset_at: datetime

    def is_expired(self, now: datetime, ttl: timedelta | None) -> bool:
        """Tokens only expire when a TTL is configured."""
        if ttl is None:
            return False
        return now > self.reset_at + ttl
