"""Unit test fixtures with mocked dependencies."""

import pytest
from pydantic import SecretStr


@pytest.fixture
def mock_db_settings():
    """Provide test database settings."""
    from infrastructure.settings import DatabaseSettings

    return DatabaseSettings(
        host="testhost",
        port=5432,
        database="testdb",
        username="testuser",
        password=SecretStr("testpass"),
        pool_max_connections=5,
    )


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reset cached settings so environment overrides apply per test."""
    from infrastructure.settings import (
        get_database_settings,
        get_identity_provider_settings,
        get_onboarding_settings,
        get_settings,
    )

    yield
    for cached in (
        get_settings,
        get_database_settings,
        get_identity_provider_settings,
        get_onboarding_settings,
    ):
        cached.cache_clear()
