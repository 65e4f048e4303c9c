"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance. The schema is
created from the ORM metadata, which uses the same constraint names as
the migrations.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from pydantic import SecretStr
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_write_engine
from infrastructure.database.models import Base
from infrastructure.settings import DatabaseSettings

import tenancy.infrastructure.models  # noqa: F401  (registers tables on Base)


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        ONBOARDING_DB_HOST, ONBOARDING_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("ONBOARDING_DB_HOST", "localhost"),
        port=int(os.getenv("ONBOARDING_DB_PORT", "5432")),
        database=os.getenv("ONBOARDING_DB_DATABASE", "onboarding"),
        username=os.getenv("ONBOARDING_DB_USERNAME", "onboarding"),
        password=SecretStr(
            os.getenv("ONBOARDING_DB_PASSWORD", "onboarding_dev_password")
        ),
        pool_max_connections=10,
    )


@pytest_asyncio.fixture
async def engine(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[AsyncEngine, None]:
    """Provide an engine against a schema with no tenancy rows."""
    engine = create_write_engine(integration_db_settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(
            text(
                "TRUNCATE tenant_alias_reservations, tenant_memberships, "
                "tenants, users CASCADE"
            )
        )
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def async_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async session for integration tests."""
    async with session_factory() as session:
        yield session
