"""Tenant aggregate for the tenancy context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from tenancy.domain.value_objects import (
    SubscriptionPlan,
    TenantId,
    TenantStatus,
    UserId,
)


@dataclass
class Tenant:
    """Tenant aggregate representing a customer organization on the platform.

    Each tenant is linked 1:1 with an organization in the identity provider.

    Business rules:
    - The alias is globally unique, case-sensitive and never changes after
      creation (no operation on this aggregate rewrites it)
    - The owner is only missing during the provisioning window between
      creating the tenant row and assigning its owning user; readers must
      not treat a missing owner as a domain state
    """

    id: TenantId
    alias: str
    display_name: str
    identity_provider_org_id: str
    owner_id: UserId | None = None
    subscription_plan: SubscriptionPlan = SubscriptionPlan.FREE
    status: TenantStatus = TenantStatus.ACTIVE
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def provision(
        cls,
        alias: str,
        display_name: str,
        identity_provider_org_id: str,
    ) -> Tenant:
        """Factory method for a newly onboarded tenant.

        The tenant starts on the FREE plan, ACTIVE, and without an owner.

        Args:
            alias: The reserved tenant alias
            display_name: Human readable organization name
            identity_provider_org_id: ID of the matching identity provider organization

        Returns:
            A new, ownerless Tenant aggregate
        """
        return cls(
            id=TenantId.generate(),
            alias=alias,
            display_name=display_name,
            identity_provider_org_id=identity_provider_org_id,
        )

    def assign_owner(self, user_id: UserId) -> None:
        """Set the owning user of this tenant.

        Assigning the same owner again is a no-op.

        Raises:
            ValueError: If the tenant already has a different owner
        """
        if self.owner_id is not None and self.owner_id != user_id:
            raise ValueError(
                f"Tenant {self.id} is already owned by {self.owner_id}"
            )
        self.owner_id = user_id

    @property
    def has_owner(self) -> bool:
        """Whether the owner has been assigned."""
        return self.owner_id is not None
