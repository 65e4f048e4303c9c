"""Tenant read service for the tenancy bounded context."""

from __future__ import annotations

from tenancy.application.observability import (
    DefaultTenantServiceProbe,
    TenantServiceProbe,
)
from tenancy.domain.aggregates import Tenant
from tenancy.domain.value_objects import TenantId
from tenancy.ports.repositories import ITenantRepository


class TenantService:
    """Application service for reading onboarded tenants."""

    def __init__(
        self,
        tenant_repository: ITenantRepository,
        probe: TenantServiceProbe | None = None,
    ):
        self._tenant_repository = tenant_repository
        self._probe = probe or DefaultTenantServiceProbe()

    async def get_tenant(self, tenant_id: TenantId) -> Tenant | None:
        """Retrieve a tenant by ID.

        Returns:
            The Tenant aggregate, or None if not found
        """
        tenant = await self._tenant_repository.get_by_id(tenant_id)
        if tenant is None:
            self._probe.tenant_not_found(lookup="id", value=tenant_id.value)
            return None

        self._probe.tenant_retrieved(tenant_id=tenant.id.value)
        return tenant

    async def get_tenant_by_alias(self, alias: str) -> Tenant | None:
        """Retrieve a tenant by its alias.

        Returns:
            The Tenant aggregate, or None if not found
        """
        tenant = await self._tenant_repository.get_by_alias(alias)
        if tenant is None:
            self._probe.tenant_not_found(lookup="alias", value=alias)
            return None

        self._probe.tenant_retrieved(tenant_id=tenant.id.value)
        return tenant
