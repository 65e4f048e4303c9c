"""PostgreSQL implementation of IAliasReservationRepository.

The alias column is the table's primary key. A reservation is a plain
INSERT, and the primary key violation is the only signal that another
request got there first; there is no read-then-write check.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tenancy.domain.aggregates import RESERVATION_TTL, AliasReservation
from tenancy.domain.value_objects import AliasReservationStatus
from tenancy.infrastructure.models import AliasReservationModel
from tenancy.infrastructure.observability import (
    AliasReservationRepositoryProbe,
    DefaultAliasReservationRepositoryProbe,
)
from tenancy.ports.exceptions import AliasAlreadyTakenError
from tenancy.ports.repositories import IAliasReservationRepository


class AliasReservationRepository(IAliasReservationRepository):
    """Repository managing PostgreSQL storage for alias reservations.

    Expired RESERVED rows are removed in two places: by the sweeper on a
    timer, and by reserve() for the alias being claimed, so an expired
    alias is registrable immediately rather than after the next sweep.
    """

    def __init__(
        self,
        session: AsyncSession,
        ttl: timedelta = RESERVATION_TTL,
        probe: AliasReservationRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            ttl: How long a RESERVED claim lives before it expires
            probe: Optional domain probe for observability
        """
        self._session = session
        self._ttl = ttl
        self._probe = probe or DefaultAliasReservationRepositoryProbe()

    async def reserve(self, alias: str) -> AliasReservation:
        """Insert a RESERVED claim on an alias.

        Raises:
            AliasAlreadyTakenError: If a live claim on the alias exists
        """
        reservation = AliasReservation.reserve(alias, ttl=self._ttl)

        purge = delete(AliasReservationModel).where(
            AliasReservationModel.alias == alias,
            AliasReservationModel.status == AliasReservationStatus.RESERVED.value,
            AliasReservationModel.expires_at <= reservation.created_at,
        )
        result = await self._session.execute(purge)
        if result.rowcount:
            self._probe.expired_reservation_replaced(alias)

        self._session.add(
            AliasReservationModel(
                alias=reservation.alias,
                status=reservation.status.value,
                created_at=reservation.created_at,
                expires_at=reservation.expires_at,
            )
        )
        try:
            await self._session.flush()
        except IntegrityError as e:
            if "pk_tenant_alias_reservations" in str(e):
                self._probe.alias_taken(alias)
                raise AliasAlreadyTakenError(alias) from e
            raise

        self._probe.alias_reserved(alias)
        return reservation

    async def confirm(self, alias: str) -> None:
        """Mark the claim CONFIRMED. Does nothing if the alias is absent."""
        stmt = (
            update(AliasReservationModel)
            .where(AliasReservationModel.alias == alias)
            .values(status=AliasReservationStatus.CONFIRMED.value)
        )
        await self._session.execute(stmt)
        self._probe.alias_confirmed(alias)

    async def delete(self, alias: str) -> None:
        """Remove the claim whatever its status. Does nothing if absent."""
        stmt = delete(AliasReservationModel).where(
            AliasReservationModel.alias == alias
        )
        await self._session.execute(stmt)
        self._probe.alias_released(alias)

    async def get(self, alias: str) -> AliasReservation | None:
        """Fetch the claim on an alias.

        Returns:
            The AliasReservation, or None if the alias is free
        """
        stmt = select(AliasReservationModel).where(
            AliasReservationModel.alias == alias
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return AliasReservation(
            alias=model.alias,
            status=AliasReservationStatus(model.status),
            created_at=model.created_at,
            expires_at=model.expires_at,
        )

    async def sweep_expired(self, now: datetime) -> int:
        """Delete RESERVED claims that expired at or before now.

        Returns:
            Number of claims removed
        """
        stmt = delete(AliasReservationModel).where(
            AliasReservationModel.status == AliasReservationStatus.RESERVED.value,
            AliasReservationModel.expires_at <= now,
        )
        result = await self._session.execute(stmt)
        count = result.rowcount or 0
        if count:
            self._probe.expired_reservations_swept(count)
        return count
