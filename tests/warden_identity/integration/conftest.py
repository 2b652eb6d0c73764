"""
Pytest configuration for warden_identity integration tests.

Integration tests run against an in-memory aiosqlite database.
Import the shared fixtures to make them available.
"""

import pytest_asyncio

# Re-export shared database fixtures
from tests.shared.fixtures.database import (
    async_engine,
    db_session,
    session_maker,
)
from tests.shared.fixtures.factories import RecordingMailer, make_settings
from warden_identity import IdentityServices

__all__ = [
    "async_engine",
    "db_session",
    "identity",
    "mailer",
    "session_maker",
]


@pytest_asyncio.fixture
async def mailer():
    return RecordingMailer()


@pytest_asyncio.fixture
async def identity(db_session, mailer):
    """Identity services over the test session; deliveries drained on exit."""
    services = IdentityServices.build(db_session, settings=make_settings(), mailer=mailer)

    yield services

    await services.notifications.drain()
