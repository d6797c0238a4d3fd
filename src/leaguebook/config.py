"""Application settings via pydantic-settings. Loads from environment and .env file."""

from __future__ import annotations

import secrets

from pydantic import model_validator
from pydantic_settings import BaseSettings

VALID_ENVS = frozenset({"development", "staging", "production"})


class Settings(BaseSettings):
    """Leaguebook configuration.

    All values can be overridden via environment variables or .env file.
    The standings engine itself never reads settings; they only configure
    the database, the API and logging.
    """

    # Database
    database_url: str = "sqlite+aiosqlite:///leaguebook.db"

    # Environment
    leaguebook_env: str = "development"

    # Admin write path (final winners). Sent as the X-Admin-Token header.
    leaguebook_admin_token: str = ""
    leaguebook_readonly: bool = False  # Share links: refuse every admin write

    # History
    leaguebook_completed_season_weeks: int = 17  # Used when a season has no config

    # Logging
    leaguebook_log_level: str = "INFO"

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def _check_env(self) -> Settings:
        if self.leaguebook_env not in VALID_ENVS:
            msg = f"LEAGUEBOOK_ENV must be one of {sorted(VALID_ENVS)}, got {self.leaguebook_env!r}"
            raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def _ensure_admin_token(self) -> Settings:
        """Auto-generate an admin token in dev; reject a missing token in production."""
        if not self.leaguebook_admin_token:
            if self.leaguebook_env == "production":
                msg = (
                    "LEAGUEBOOK_ADMIN_TOKEN must be set in production. "
                    "Generate one with: python -c "
                    '"import secrets; print(secrets.token_urlsafe(32))"'
                )
                raise ValueError(msg)
            self.leaguebook_admin_token = secrets.token_urlsafe(32)
        return self
