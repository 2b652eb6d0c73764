"""Root pytest configuration.

Test Structure:
    tests/
    ├── warden_auth/           # Hashing and token primitives
    │   └── unit/
    ├── warden_config/         # Settings and logging
    │   └── unit/
    ├── warden_identity/       # Users, accounts, login and reset flows
    │   ├── unit/              # Fast, isolated tests (mocked repositories)
    │   └── integration/       # SQLAlchemy over in-memory aiosqlite
    └── shared/                # Shared fixtures and utilities

Settings are read from config/.env.dev or config/.env when present; a
throwaway JWT secret is provided otherwise so ``get_settings()`` works.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from warden_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")
elif (CONFIG_DIR / ".env").exists():
    load_dotenv(CONFIG_DIR / ".env")

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that run against an in-memory SQLite database",
    )


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Start and end the session with a fresh settings cache."""
    clear_settings_cache()
    yield
    clear_settings_cache()
