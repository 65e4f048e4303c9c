"""Pydantic models for tenant API responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from tenancy.domain.aggregates import Tenant


class TenantResponse(BaseModel):
    """Response model for tenant."""

    id: str = Field(..., description="Tenant ID (ULID format)")
    alias: str = Field(..., description="Tenant alias")
    display_name: str = Field(..., description="Organization display name")
    identity_provider_org_id: str = Field(
        ..., description="Organization ID in the identity provider"
    )
    owner_id: str | None = Field(None, description="Owning user ID")
    subscription_plan: str = Field(..., description="Subscription plan")
    status: str = Field(..., description="Tenant status")

    @classmethod
    def from_domain(cls, tenant: Tenant) -> TenantResponse:
        """Convert domain Tenant aggregate to API response.

        Args:
            tenant: Tenant domain aggregate

        Returns:
            TenantResponse
        """
        return cls(
            id=tenant.id.value,
            alias=tenant.alias,
            display_name=tenant.display_name,
            identity_provider_org_id=tenant.identity_provider_org_id,
            owner_id=tenant.owner_id.value if tenant.owner_id else None,
            subscription_plan=tenant.subscription_plan.value,
            status=tenant.status.value,
        )
