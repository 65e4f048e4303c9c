"""HTTP routes for self-service tenant registration."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from tenancy.application.services import TenantOnboardingService
from tenancy.dependencies.onboarding import get_onboarding_service
from tenancy.ports.exceptions import (
    AliasAlreadyTakenError,
    ConflictError,
    ProvisioningError,
)
from tenancy.presentation.registration.models import (
    RegisterTenantRequest,
    RegisterTenantResponse,
)

router = APIRouter(
    prefix="/auth",
    tags=["registration"],
)


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
)
async def register_tenant(
    request: RegisterTenantRequest,
    service: Annotated[TenantOnboardingService, Depends(get_onboarding_service)],
) -> RegisterTenantResponse:
    """Register a new tenant with its owning user.

    Args:
        request: Registration payload, validated before the saga runs
        service: Onboarding service running the registration saga

    Returns:
        RegisterTenantResponse with the tenant id and login URL

    Raises:
        HTTPException: 409 if the alias or identity is already taken
        HTTPException: 500 if provisioning failed and was rolled back
    """
    try:
        result = await service.register(
            email=request.email,
            password=request.password,
            full_name=request.full_name,
            organization_name=request.organization_name,
            alias=request.organization_alias,
        )
        return RegisterTenantResponse.from_result(result)

    except AliasAlreadyTakenError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e
    except ConflictError as e:
        # Only the alias is safe to echo back
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=ConflictError.DEFAULT_MESSAGE,
        ) from e
    except ProvisioningError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e
