"""Tests for application configuration."""

import pytest

from leaguebook.config import Settings


class TestAdminToken:
    def test_development_generates_token(self) -> None:
        """In development a missing admin token is generated."""
        settings = Settings(
            leaguebook_env="development",
            leaguebook_admin_token="",
            database_url="sqlite+aiosqlite:///:memory:",
        )
        assert len(settings.leaguebook_admin_token) >= 32

    def test_production_requires_token(self) -> None:
        """In production a missing admin token is a startup error."""
        with pytest.raises(ValueError, match="LEAGUEBOOK_ADMIN_TOKEN"):
            Settings(
                leaguebook_env="production",
                leaguebook_admin_token="",
                database_url="sqlite+aiosqlite:///:memory:",
            )

    def test_production_keeps_explicit_token(self) -> None:
        settings = Settings(
            leaguebook_env="production",
            leaguebook_admin_token="test-admin-token",
            database_url="sqlite+aiosqlite:///:memory:",
        )
        assert settings.leaguebook_admin_token == "test-admin-token"


class TestEnvironment:
    def test_unknown_env_rejected(self) -> None:
        with pytest.raises(ValueError, match="LEAGUEBOOK_ENV"):
            Settings(leaguebook_env="qa", database_url="sqlite+aiosqlite:///:memory:")

    def test_defaults(self, settings: Settings) -> None:
        assert settings.leaguebook_completed_season_weeks == 17
        assert settings.leaguebook_readonly is False

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LEAGUEBOOK_READONLY", "true")
        monkeypatch.setenv("LEAGUEBOOK_COMPLETED_SEASON_WEEKS", "14")
        settings = Settings(database_url="sqlite+aiosqlite:///:memory:")
        assert settings.leaguebook_readonly is True
        assert settings.leaguebook_completed_season_weeks == 14
