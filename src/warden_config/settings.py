"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. WARDEN_ENV_FILE environment variable (path to a .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / "pyproject.toml").is_file():
            return parent

    return Path.cwd()


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. WARDEN_ENV_FILE env var (full path)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("WARDEN_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Service configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (config/.env.dev or config/.env)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Security (MUST be set - token signing fails without it)
    jwt_secret_key: SecretStr

    # Application
    app_name: str = "Warden"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./warden.db"

    # JWT
    jwt_algorithm: str = "HS256"
    jwt_public_key: SecretStr | None = None  # Only for asymmetric algorithms
    jwt_expire_seconds: int = 86400
    jwt_issuer: str | None = None

    # Passwords
    password_salt_rounds: int = 10
    password_min_length: int = 8

    # Password reset
    password_reset_token_bytes: int = 20
    password_reset_token_ttl_minutes: int | None = None  # None = tokens never expire

    # SMTP (SMTP_ prefix)
    smtp_enabled: bool = False
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: SecretStr | None = None
    smtp_from_email: str = ""
    smtp_from_name: str = "Warden"
    smtp_use_tls: bool = True
    smtp_starttls: bool = True

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    @field_validator("password_salt_rounds")
    @classmethod
    def _validate_salt_rounds(cls, v: int) -> int:
        """bcrypt only accepts cost factors between 4 and 31."""
        if not 4 <= v <= 31:
            msg = "password_salt_rounds must be between 4 and 31"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def _require_public_key_for_asymmetric(self) -> Settings:
        """RS*/ES*/EdDSA tokens are verified with the public key."""
        if self.jwt_is_asymmetric and self.jwt_public_key is None:
            msg = f"jwt_public_key is required for {self.jwt_algorithm}"
            raise ValueError(msg)
        return self

    @property
    def jwt_is_asymmetric(self) -> bool:
        return not self.jwt_algorithm.startswith("HS")


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    The required field (jwt_secret_key) must be provided via environment
    variables or .env file.
    """
    return Settings()  # type: ignore[call-arg]  # pydantic-settings loads from env


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
