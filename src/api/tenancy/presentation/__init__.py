"""Tenancy presentation layer - aggregate-based organization.

Each package holds the routes and models for one slice of the API.
"""

from __future__ import annotations

from fastapi import APIRouter

from tenancy.presentation import registration, tenants

router = APIRouter(
    prefix="/tenancy",
    tags=["tenancy"],
)

router.include_router(registration.router)
router.include_router(tenants.router)

__all__ = ["router"]
