"""Fixtures shared by the tenancy adapter tests."""

from unittest.mock import AsyncMock, MagicMock, Mock

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession


@pytest.fixture
def integrity_error():
    """Build an IntegrityError as asyncpg reports a unique violation."""

    def build(constraint: str) -> IntegrityError:
        return IntegrityError(
            "INSERT ...",
            {},
            Exception(
                f'duplicate key value violates unique constraint "{constraint}"'
            ),
        )

    return build


@pytest.fixture
def execute_result():
    """Build a Result mock carrying a scalar and a rowcount."""

    def build(scalar=None, rowcount: int = 0) -> MagicMock:
        result = MagicMock()
        result.scalar_one_or_none.return_value = scalar
        result.rowcount = rowcount
        return result

    return build


@pytest.fixture
def mock_session(execute_result):
    """Create mock async session."""
    session = Mock(spec=AsyncSession)
    session.execute = AsyncMock(return_value=execute_result())
    session.flush = AsyncMock()

    nested = AsyncMock()
    nested.__aenter__ = AsyncMock(return_value=None)
    nested.__aexit__ = AsyncMock(return_value=False)
    session.begin_nested = Mock(return_value=nested)
    return session
