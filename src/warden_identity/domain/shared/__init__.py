"""Shared domain helpers."""

from warden_identity.domain.shared.time import ensure_tz_aware, utc_now
from warden_identity.domain.shared.update_result import UpdateResult

__all__ = ["UpdateResult", "ensure_tz_aware", "utc_now"]
