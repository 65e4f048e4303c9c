"""PostgreSQL implementation of ITenantRepository.

This repository manages tenant storage in PostgreSQL. Uniqueness of alias
and identity provider organization id is enforced by unique indexes and
surfaced as DuplicateTenantError.
"""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tenancy.domain.aggregates import Tenant
from tenancy.domain.value_objects import (
    SubscriptionPlan,
    TenantId,
    TenantStatus,
    UserId,
)
from tenancy.infrastructure.models import TenantModel
from tenancy.infrastructure.observability import (
    DefaultTenantRepositoryProbe,
    TenantRepositoryProbe,
)
from tenancy.ports.exceptions import DuplicateTenantError
from tenancy.ports.repositories import ITenantRepository

_UNIQUE_INDEXES = ("ix_tenants_alias", "ix_tenants_identity_provider_org_id")


class TenantRepository(ITenantRepository):
    """Repository managing PostgreSQL storage for Tenant aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: TenantRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultTenantRepositoryProbe()

    async def save(self, tenant: Tenant) -> None:
        """Persist a tenant to PostgreSQL.

        The alias is written only on insert.

        Args:
            tenant: The Tenant aggregate to persist

        Raises:
            DuplicateTenantError: If alias or organization id already exists
        """
        try:
            stmt = select(TenantModel).where(TenantModel.id == tenant.id.value)
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()

            if model:
                # Update existing
                model.display_name = tenant.display_name
                model.owner_id = tenant.owner_id.value if tenant.owner_id else None
                model.subscription_plan = tenant.subscription_plan.value
                model.status = tenant.status.value
            else:
                # Create new
                model = TenantModel(
                    id=tenant.id.value,
                    identity_provider_org_id=tenant.identity_provider_org_id,
                    alias=tenant.alias,
                    display_name=tenant.display_name,
                    owner_id=tenant.owner_id.value if tenant.owner_id else None,
                    subscription_plan=tenant.subscription_plan.value,
                    status=tenant.status.value,
                )
                self._session.add(model)

            await self._session.flush()
            self._probe.tenant_saved(tenant.id.value)

        except IntegrityError as e:
            if any(index in str(e) for index in _UNIQUE_INDEXES):
                self._probe.duplicate_tenant(tenant.alias)
                raise DuplicateTenantError() from e
            raise

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Fetch a tenant by ID.

        Returns:
            The Tenant aggregate, or None if not found
        """
        return await self._get_one(TenantModel.id == tenant_id.value)

    async def get_by_alias(self, alias: str) -> Tenant | None:
        """Fetch a tenant by alias (case-sensitive).

        Returns:
            The Tenant aggregate, or None if not found
        """
        return await self._get_one(TenantModel.alias == alias)

    async def get_by_identity_provider_org_id(self, org_id: str) -> Tenant | None:
        """Fetch a tenant by identity provider organization id."""
        return await self._get_one(TenantModel.identity_provider_org_id == org_id)

    async def update_owner(self, tenant_id: TenantId, user_id: UserId) -> None:
        """Set the owner of a tenant.

        Raises:
            LookupError: If no tenant has the given ID
        """
        stmt = (
            update(TenantModel)
            .where(TenantModel.id == tenant_id.value)
            .values(owner_id=user_id.value)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise LookupError(f"Tenant {tenant_id} not found")

        self._probe.tenant_owner_updated(tenant_id.value, user_id.value)

    async def _get_one(self, criterion) -> Tenant | None:
        stmt = select(TenantModel).where(criterion)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        tenant = self._to_domain(model)
        self._probe.tenant_retrieved(tenant.id.value)
        return tenant

    @staticmethod
    def _to_domain(model: TenantModel) -> Tenant:
        return Tenant(
            id=TenantId(value=model.id),
            alias=model.alias,
            display_name=model.display_name,
            identity_provider_org_id=model.identity_provider_org_id,
            owner_id=UserId(value=model.owner_id) if model.owner_id else None,
            subscription_plan=SubscriptionPlan(model.subscription_plan),
            status=TenantStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
