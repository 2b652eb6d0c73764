"""Shared pytest fixtures for all test domains."""

from tests.shared.fixtures.database import (
    async_engine,
    db_session,
    session_maker,
)
from tests.shared.fixtures.factories import (
    RecordingMailer,
    make_hasher,
    make_settings,
)

__all__ = [
    "RecordingMailer",
    "async_engine",
    "db_session",
    "make_hasher",
    "make_settings",
    "session_maker",
]
