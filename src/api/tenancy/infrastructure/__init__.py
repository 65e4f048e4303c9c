"""Infrastructure adapters for the tenancy bounded context."""

from tenancy.infrastructure.alias_reservation_repository import (
    AliasReservationRepository,
)
from tenancy.infrastructure.alias_reservation_sweeper import AliasReservationSweeper
from tenancy.infrastructure.event_publisher import InProcessEventPublisher
from tenancy.infrastructure.keycloak import KeycloakAdminClient
from tenancy.infrastructure.tenant_repository import TenantRepository
from tenancy.infrastructure.user_repository import UserRepository

__all__ = [
    "AliasReservationRepository",
    "AliasReservationSweeper",
    "InProcessEventPublisher",
    "KeycloakAdminClient",
    "TenantRepository",
    "UserRepository",
]
