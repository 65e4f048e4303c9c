"""Repository protocols (ports) for the tenancy bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. Every mutating call commits on its own, so partial onboarding
progress is durable between saga steps.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence, runtime_checkable

from tenancy.domain.aggregates import AliasReservation, Tenant, User
from tenancy.domain.value_objects import (
    TenantId,
    TenantMembership,
    UserId,
    UserProfile,
)


@runtime_checkable
class IAliasReservationRepository(Protocol):
    """Store holding the uniqueness constraint over tenant aliases.

    The unique constraint on the alias is the only race-prevention
    mechanism; implementations must not check for existence before insert.
    """

    async def reserve(self, alias: str) -> AliasReservation:
        """Atomically insert a RESERVED claim on an alias.

        An expired RESERVED claim on the same alias is discarded first.

        Raises:
            AliasAlreadyTakenError: If a live RESERVED or CONFIRMED row exists
        """
        ...

    async def confirm(self, alias: str) -> None:
        """Transition a claim to CONFIRMED. No-op if the alias is absent."""
        ...

    async def delete(self, alias: str) -> None:
        """Remove a claim regardless of its status. No-op if absent."""
        ...

    async def get(self, alias: str) -> AliasReservation | None:
        """Retrieve the claim on an alias, or None."""
        ...

    async def sweep_expired(self, now: datetime) -> int:
        """Delete RESERVED claims whose expiry has passed.

        Returns:
            Number of claims removed
        """
        ...


@runtime_checkable
class ITenantRepository(Protocol):
    """Repository for Tenant aggregate persistence."""

    async def save(self, tenant: Tenant) -> None:
        """Persist a tenant aggregate (insert or update).

        Raises:
            DuplicateTenantError: If alias or identity provider org id collides
        """
        ...

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Retrieve a tenant by its ID."""
        ...

    async def get_by_alias(self, alias: str) -> Tenant | None:
        """Retrieve a tenant by its alias (case-sensitive)."""
        ...

    async def get_by_identity_provider_org_id(self, org_id: str) -> Tenant | None:
        """Retrieve a tenant by its identity provider organization id."""
        ...

    async def update_owner(self, tenant_id: TenantId, user_id: UserId) -> None:
        """Set the owning user of a tenant.

        Raises:
            LookupError: If the tenant does not exist
        """
        ...


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for platform users and their tenant memberships."""

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by ID with memberships loaded."""
        ...

    async def get_by_email(self, email: str) -> User | None:
        """Retrieve a user by email with memberships loaded."""
        ...

    async def upsert_with_tenant_membership(
        self,
        identity_provider_user_id: str,
        email: str,
        profile: UserProfile,
        memberships: Sequence[TenantMembership],
    ) -> User:
        """Create the user if no user owns the email, then grant memberships.

        Memberships for a tenant the user already belongs to are merged, so
        calling this twice with the same arguments leaves a single entry per
        tenant.

        Returns:
            The stored user with all memberships
        """
        ...
