"""Shared test fixtures."""

import pytest

from leaguebook.config import Settings


@pytest.fixture
def settings() -> Settings:
    """Test settings with defaults."""
    return Settings(leaguebook_env="development", database_url="sqlite+aiosqlite:///:memory:")
