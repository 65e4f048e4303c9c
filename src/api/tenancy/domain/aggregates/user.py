"""User aggregate for the tenancy context."""

from __future__ import annotations

from dataclasses import dataclass, field

from tenancy.domain.value_objects import TenantId, TenantMembership, UserId, UserProfile


@dataclass
class User:
    """User aggregate representing a person on the platform.

    Users mirror an identity held by the identity provider and carry the
    set of tenants they belong to.

    Business rules:
    - Email is unique across the directory
    - A user holds at most one membership per tenant; granting a membership
      for a tenant the user already belongs to merges the roles
    """

    id: UserId
    email: str
    identity_provider_user_id: str
    profile: UserProfile
    memberships: list[TenantMembership] = field(default_factory=list)

    @classmethod
    def register(
        cls,
        email: str,
        identity_provider_user_id: str,
        profile: UserProfile,
    ) -> User:
        """Factory method for a user seen for the first time."""
        return cls(
            id=UserId.generate(),
            email=email,
            identity_provider_user_id=identity_provider_user_id,
            profile=profile,
        )

    def membership_for(self, tenant_id: TenantId) -> TenantMembership | None:
        """Return the membership for a tenant, or None if not a member."""
        for membership in self.memberships:
            if membership.tenant_id == tenant_id:
                return membership
        return None

    def grant_membership(self, membership: TenantMembership) -> bool:
        """Add or merge a tenant membership.

        Args:
            membership: The membership to grant

        Returns:
            True if the user's memberships changed, False if the grant was
            already fully present
        """
        for index, existing in enumerate(self.memberships):
            if existing.tenant_id == membership.tenant_id:
                merged = existing.merged_with(membership)
                if merged == existing:
                    return False
                self.memberships[index] = merged
                return True

        self.memberships.append(membership)
        return True

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.email})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
