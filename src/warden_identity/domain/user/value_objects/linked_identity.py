from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class LinkedIdentity:
    """A third-party identity linked to a local user, one per provider."""

    provider: str
    external_id: str
    email: str | None = None
    display_name: str | None = None
    token: str | None = None
    expires_at: datetime | None = None
