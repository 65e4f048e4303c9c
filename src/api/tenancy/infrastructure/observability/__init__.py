"""Domain-Oriented Observability for tenancy infrastructure."""

from tenancy.infrastructure.observability.identity_provider_probe import (
    DefaultIdentityProviderProbe,
    IdentityProviderProbe,
)
from tenancy.infrastructure.observability.repository_probe import (
    AliasReservationRepositoryProbe,
    DefaultAliasReservationRepositoryProbe,
    DefaultTenantRepositoryProbe,
    DefaultUserRepositoryProbe,
    TenantRepositoryProbe,
    UserRepositoryProbe,
)
from tenancy.infrastructure.observability.worker_probe import (
    DefaultEventPublisherProbe,
    DefaultSweeperProbe,
    EventPublisherProbe,
    SweeperProbe,
)

__all__ = [
    "AliasReservationRepositoryProbe",
    "DefaultAliasReservationRepositoryProbe",
    "TenantRepositoryProbe",
    "DefaultTenantRepositoryProbe",
    "UserRepositoryProbe",
    "DefaultUserRepositoryProbe",
    "IdentityProviderProbe",
    "DefaultIdentityProviderProbe",
    "SweeperProbe",
    "DefaultSweeperProbe",
    "EventPublisherProbe",
    "DefaultEventPublisherProbe",
]
