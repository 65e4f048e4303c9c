"""Tenant registration endpoints."""

from tenancy.presentation.registration.routes import router

__all__ = ["router"]
