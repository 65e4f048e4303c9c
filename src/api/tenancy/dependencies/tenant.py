"""Dependency wiring for tenant read operations."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from tenancy.application.observability import (
    DefaultTenantServiceProbe,
    TenantServiceProbe,
)
from tenancy.application.services import TenantService
from tenancy.dependencies.repositories import get_tenant_repository
from tenancy.infrastructure.tenant_repository import TenantRepository


def get_tenant_service_probe() -> TenantServiceProbe:
    """Get TenantServiceProbe instance."""
    return DefaultTenantServiceProbe()


def get_tenant_service(
    tenant_repository: Annotated[TenantRepository, Depends(get_tenant_repository)],
    probe: Annotated[TenantServiceProbe, Depends(get_tenant_service_probe)],
) -> TenantService:
    """Get TenantService instance."""
    return TenantService(
        tenant_repository=tenant_repository,
        probe=probe,
    )
