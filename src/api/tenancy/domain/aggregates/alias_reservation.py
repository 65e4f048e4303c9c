"""Alias reservation aggregate for the tenancy context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from tenancy.domain.value_objects import AliasReservationStatus

RESERVATION_TTL = timedelta(minutes=30)


@dataclass
class AliasReservation:
    """A short-lived claim on a tenant alias.

    The alias itself is the identity. A RESERVED claim that is not confirmed
    within its TTL expires and frees the alias again; CONFIRMED claims never
    expire.
    """

    alias: str
    status: AliasReservationStatus
    created_at: datetime
    expires_at: datetime

    @classmethod
    def reserve(
        cls,
        alias: str,
        ttl: timedelta = RESERVATION_TTL,
        now: datetime | None = None,
    ) -> AliasReservation:
        """Create a new RESERVED claim expiring after ttl."""
        now = now or datetime.now(UTC)
        return cls(
            alias=alias,
            status=AliasReservationStatus.RESERVED,
            created_at=now,
            expires_at=now + ttl,
        )

    def confirm(self) -> None:
        """Make the claim permanent. Confirming twice is a no-op."""
        self.status = AliasReservationStatus.CONFIRMED

    def is_expired(self, now: datetime | None = None) -> bool:
        """Whether this claim has lapsed and may be removed."""
        if self.status is not AliasReservationStatus.RESERVED:
            return False
        return self.expires_at <= (now or datetime.now(UTC))
