"""Dependency wiring for the tenant onboarding saga."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_write_session
from infrastructure.settings import OnboardingSettings, get_onboarding_settings
from tenancy.application.observability import (
    DefaultOnboardingSagaProbe,
    OnboardingSagaProbe,
)
from tenancy.application.services import TenantOnboardingService
from tenancy.dependencies.events import get_event_publisher
from tenancy.dependencies.identity_provider import get_identity_provider
from tenancy.dependencies.repositories import (
    get_alias_reservation_repository,
    get_tenant_repository,
    get_user_repository,
)
from tenancy.infrastructure.alias_reservation_repository import (
    AliasReservationRepository,
)
from tenancy.infrastructure.tenant_repository import TenantRepository
from tenancy.infrastructure.user_repository import UserRepository
from tenancy.ports.events import IDomainEventPublisher
from tenancy.ports.identity_provider import IIdentityProviderGateway


def get_onboarding_saga_probe() -> OnboardingSagaProbe:
    """Get OnboardingSagaProbe instance.

    Returns:
        DefaultOnboardingSagaProbe instance for observability
    """
    return DefaultOnboardingSagaProbe()


def get_onboarding_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    alias_reservation_repository: Annotated[
        AliasReservationRepository, Depends(get_alias_reservation_repository)
    ],
    tenant_repository: Annotated[TenantRepository, Depends(get_tenant_repository)],
    user_repository: Annotated[UserRepository, Depends(get_user_repository)],
    identity_provider: Annotated[
        IIdentityProviderGateway, Depends(get_identity_provider)
    ],
    event_publisher: Annotated[IDomainEventPublisher, Depends(get_event_publisher)],
    settings: Annotated[OnboardingSettings, Depends(get_onboarding_settings)],
    probe: Annotated[OnboardingSagaProbe, Depends(get_onboarding_saga_probe)],
) -> TenantOnboardingService:
    """Get TenantOnboardingService instance.

    All repositories share the request's session; the service commits
    each local step separately.
    """
    return TenantOnboardingService(
        alias_reservation_repository=alias_reservation_repository,
        tenant_repository=tenant_repository,
        user_repository=user_repository,
        identity_provider=identity_provider,
        event_publisher=event_publisher,
        session=session,
        root_domain=settings.root_domain,
        probe=probe,
    )
