"""Database infrastructure - shared async engine and session primitives."""

from infrastructure.database.dependencies import (
    close_database_connections,
    get_session_factory,
    get_write_session,
)

__all__ = [
    "close_database_connections",
    "get_session_factory",
    "get_write_session",
]
