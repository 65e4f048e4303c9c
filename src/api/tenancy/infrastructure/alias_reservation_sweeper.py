"""Background worker expiring stale alias reservations.

PostgreSQL has no TTL index, so RESERVED claims whose expiry has passed
are deleted on a timer. CONFIRMED claims are never touched.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenancy.infrastructure.alias_reservation_repository import (
    AliasReservationRepository,
)
from tenancy.infrastructure.observability import DefaultSweeperProbe, SweeperProbe


class AliasReservationSweeper:
    """Periodically deletes expired RESERVED alias claims.

    Each pass opens its own short-lived session from the factory.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        interval_seconds: float = 60,
        probe: SweeperProbe | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the sweeper.

        Args:
            session_factory: Factory for creating database sessions
            interval_seconds: Pause between sweep passes
            probe: Optional domain probe for observability
            clock: Source of the current time, defaults to UTC now
        """
        self._session_factory = session_factory
        self._interval = interval_seconds
        self._probe = probe or DefaultSweeperProbe()
        self._clock = clock or (lambda: datetime.now(UTC))
        self._running = False
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        """Start the sweep loop as a background task."""
        self._running = True
        self._task = asyncio.create_task(self._sweep_loop())
        self._probe.sweeper_started(interval_seconds=self._interval)

    async def stop(self) -> None:
        """Stop the sweep loop and wait for it to exit."""
        self._running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        self._probe.sweeper_stopped()

    async def sweep_once(self) -> int:
        """Run a single sweep pass.

        Returns:
            Number of expired claims removed
        """
        async with self._session_factory() as session:
            async with session.begin():
                repository = AliasReservationRepository(session=session)
                return await repository.sweep_expired(self._clock())

    async def _sweep_loop(self) -> None:
        while self._running:
            try:
                await self.sweep_once()
            except Exception as e:
                # Keep sweeping; the next pass retries
                self._probe.sweep_failed(error=str(e))
            await asyncio.sleep(self._interval)
