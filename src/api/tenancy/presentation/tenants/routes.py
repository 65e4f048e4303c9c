"""HTTP routes for reading tenants."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from tenancy.application.services import TenantService
from tenancy.dependencies.tenant import get_tenant_service
from tenancy.domain.value_objects import TenantId
from tenancy.presentation.tenants.models import TenantResponse

router = APIRouter(
    prefix="/tenants",
    tags=["tenants"],
)


@router.get("/alias/{alias}")
async def get_tenant_by_alias(
    alias: str,
    service: Annotated[TenantService, Depends(get_tenant_service)],
) -> TenantResponse:
    """Get tenant by alias.

    Raises:
        HTTPException: 404 if tenant not found
        HTTPException: 500 for unexpected errors
    """
    try:
        tenant = await service.get_tenant_by_alias(alias)
        if tenant is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Tenant '{alias}' not found",
            )
        return TenantResponse.from_domain(tenant)

    except HTTPException:
        raise
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve tenant",
        )


@router.get("/{tenant_id}")
async def get_tenant(
    tenant_id: str,
    service: Annotated[TenantService, Depends(get_tenant_service)],
) -> TenantResponse:
    """Get tenant by ID.

    Args:
        tenant_id: Tenant ID (ULID format)
        service: Tenant service

    Returns:
        TenantResponse with tenant details

    Raises:
        HTTPException: 400 if tenant ID is invalid
        HTTPException: 404 if tenant not found
        HTTPException: 500 for unexpected errors
    """
    try:
        tenant_id_obj = TenantId.from_string(tenant_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid tenant ID format: {e}",
        ) from e

    try:
        tenant = await service.get_tenant(tenant_id_obj)
        if tenant is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Tenant {tenant_id} not found",
            )
        return TenantResponse.from_domain(tenant)

    except HTTPException:
        raise
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve tenant",
        )
