"""Tenant read endpoints."""

from tenancy.presentation.tenants.routes import router

__all__ = ["router"]
