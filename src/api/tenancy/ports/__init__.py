"""Ports (interfaces) for the tenancy bounded context.

Ports define the contracts for repositories and external collaborators
without specifying implementation details. This allows for dependency
inversion and makes the domain layer independent of infrastructure.
"""

from tenancy.ports.events import EventHandler, IDomainEventPublisher
from tenancy.ports.exceptions import (
    AliasAlreadyTakenError,
    ConflictError,
    DuplicateTenantError,
    DuplicateUserError,
    IdentityProviderConflictError,
    IdentityProviderError,
    IdentityProviderUnavailableError,
    ProvisioningError,
)
from tenancy.ports.identity_provider import (
    IdentityProviderOrganization,
    IdentityProviderUser,
    IIdentityProviderGateway,
)
from tenancy.ports.repositories import (
    IAliasReservationRepository,
    ITenantRepository,
    IUserRepository,
)

__all__ = [
    "AliasAlreadyTakenError",
    "ConflictError",
    "DuplicateTenantError",
    "DuplicateUserError",
    "EventHandler",
    "IAliasReservationRepository",
    "IDomainEventPublisher",
    "IIdentityProviderGateway",
    "ITenantRepository",
    "IUserRepository",
    "IdentityProviderConflictError",
    "IdentityProviderError",
    "IdentityProviderOrganization",
    "IdentityProviderUnavailableError",
    "IdentityProviderUser",
    "ProvisioningError",
]
