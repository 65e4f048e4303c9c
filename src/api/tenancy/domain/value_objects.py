"""Value objects for the tenancy domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from ulid import ULID


@dataclass(frozen=True)
class TenantId:
    """Identifier for a Tenant aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> TenantId:
        """Generate a new TenantId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> TenantId:
        """Create TenantId from string value.

        Args:
            value: ULID string

        Returns:
            TenantId instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid TenantId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class UserId:
    """Identifier for a platform User aggregate.

    This is the local identity, distinct from the identity provider's own
    user id which is stored alongside it on the User aggregate.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> UserId:
        """Generate a new UserId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> UserId:
        """Create UserId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid UserId: {value}") from e

        return cls(value=value)


class SubscriptionPlan(StrEnum):
    """Commercial plan a tenant is subscribed to."""

    FREE = "FREE"
    PRO = "PRO"
    ENTERPRISE = "ENTERPRISE"


class TenantStatus(StrEnum):
    """Operational status of a tenant."""

    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"


class AliasReservationStatus(StrEnum):
    """Lifecycle state of an alias reservation.

    RESERVED rows are provisional and expire; CONFIRMED rows are permanent.
    """

    RESERVED = "RESERVED"
    CONFIRMED = "CONFIRMED"


class TenantRole(StrEnum):
    """Roles a user can hold within a tenant."""

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class PlatformRole(StrEnum):
    """Platform-wide role, independent of any tenant."""

    ADMIN = "ADMIN"
    USER = "USER"


class UserStatus(StrEnum):
    """Account status of a platform user."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


@dataclass(frozen=True)
class TenantMembership:
    """A user's association with a tenant, carrying a set of roles.

    Attributes:
        tenant_id: The tenant the user belongs to
        roles: Roles held in that tenant (never empty)
        joined_at: When the user first joined the tenant (UTC)
    """

    tenant_id: TenantId
    roles: frozenset[TenantRole]
    joined_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not self.roles:
            raise ValueError("A tenant membership requires at least one role")

    @classmethod
    def owner(cls, tenant_id: TenantId) -> TenantMembership:
        """Membership granting the OWNER role on a tenant."""
        return cls(tenant_id=tenant_id, roles=frozenset({TenantRole.OWNER}))

    def merged_with(self, other: TenantMembership) -> TenantMembership:
        """Combine two memberships for the same tenant.

        Roles are unioned and the earliest join time is kept, so merging
        the same membership twice yields the same result.

        Raises:
            ValueError: If the memberships refer to different tenants
        """
        if other.tenant_id != self.tenant_id:
            raise ValueError("Cannot merge memberships of different tenants")
        return TenantMembership(
            tenant_id=self.tenant_id,
            roles=self.roles | other.roles,
            joined_at=min(self.joined_at, other.joined_at),
        )

    def has_role(self, role: TenantRole) -> bool:
        """Check whether this membership grants the given role."""
        return role in self.roles


@dataclass(frozen=True)
class UserProfile:
    """Descriptive fields of a platform user."""

    first_name: str
    last_name: str
    platform_role: PlatformRole = PlatformRole.USER
    status: UserStatus = UserStatus.ACTIVE

    @classmethod
    def from_full_name(cls, full_name: str) -> UserProfile:
        """Split a full name on its first space into first and last name.

        "Jane Doe" -> ("Jane", "Doe"); "Jane Ann Doe" -> ("Jane", "Ann Doe");
        "Cher" -> ("Cher", "").
        """
        first_name, _, last_name = full_name.partition(" ")
        return cls(first_name=first_name, last_name=last_name)


@dataclass(frozen=True)
class ReusedIdentity:
    """An identity provider user that existed before onboarding started.

    Reused identities may be shared with other tenants and must never be
    deleted when onboarding rolls back.
    """

    user_id: str


@dataclass(frozen=True)
class CreatedIdentity:
    """An identity provider user created by the current onboarding run."""

    user_id: str


ProvisionedIdentity = ReusedIdentity | CreatedIdentity
