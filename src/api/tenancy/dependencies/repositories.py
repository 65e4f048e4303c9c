"""Repository dependencies for the tenancy bounded context."""

from __future__ import annotations

from datetime import timedelta
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_write_session
from infrastructure.settings import OnboardingSettings, get_onboarding_settings
from tenancy.infrastructure.alias_reservation_repository import (
    AliasReservationRepository,
)
from tenancy.infrastructure.tenant_repository import TenantRepository
from tenancy.infrastructure.user_repository import UserRepository


def get_alias_reservation_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    settings: Annotated[OnboardingSettings, Depends(get_onboarding_settings)],
) -> AliasReservationRepository:
    """Get AliasReservationRepository with the configured TTL."""
    return AliasReservationRepository(
        session=session,
        ttl=timedelta(minutes=settings.alias_reservation_ttl_minutes),
    )


def get_tenant_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> TenantRepository:
    """Get TenantRepository instance."""
    return TenantRepository(session=session)


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> UserRepository:
    """Get UserRepository instance."""
    return UserRepository(session=session)
