"""Pydantic models for tenant registration requests and responses."""

from __future__ import annotations

import re

from pydantic import BaseModel, EmailStr, Field, field_validator

from tenancy.application.value_objects import RegistrationResult

ALIAS_PATTERN = r"^[a-z0-9][a-z0-9-]*[a-z0-9]$"

_PASSWORD_SPECIALS = "@$!%*?&-_#"
_PASSWORD_RULES = (
    (re.compile(r"[a-z]"), "a lowercase letter"),
    (re.compile(r"[A-Z]"), "an uppercase letter"),
    (re.compile(r"\d"), "a digit"),
    (re.compile(f"[{re.escape(_PASSWORD_SPECIALS)}]"), "a special character"),
)


class RegisterTenantRequest(BaseModel):
    """Request model for registering a new tenant and its owner."""

    email: EmailStr = Field(..., description="Email of the owning user")
    password: str = Field(
        ...,
        description=(
            "At least 8 characters with upper and lower case letters, a digit "
            f"and one of {_PASSWORD_SPECIALS}"
        ),
        min_length=8,
    )
    full_name: str = Field(
        ..., description="Full name of the owning user", min_length=1, max_length=100
    )
    organization_name: str = Field(
        ..., description="Organization display name", min_length=1, max_length=150
    )
    organization_alias: str = Field(
        ...,
        description="Unique tenant alias, used as the login subdomain",
        min_length=3,
        max_length=63,
        pattern=ALIAS_PATTERN,
    )

    @field_validator("password")
    @classmethod
    def password_meets_complexity(cls, value: str) -> str:
        missing = [label for pattern, label in _PASSWORD_RULES if not pattern.search(value)]
        if missing:
            raise ValueError(f"Password must contain {', '.join(missing)}")
        return value


class RegisterTenantResponse(BaseModel):
    """Response model for a completed registration."""

    tenant_id: str = Field(..., description="Tenant ID (ULID format)")
    alias: str = Field(..., description="Tenant alias")
    organization_name: str = Field(..., description="Organization display name")
    identity_provider_org_id: str = Field(
        ..., description="Organization ID in the identity provider"
    )
    login_url: str = Field(..., description="Login URL of the new tenant")

    @classmethod
    def from_result(cls, result: RegistrationResult) -> RegisterTenantResponse:
        """Convert a RegistrationResult to an API response."""
        return cls(
            tenant_id=result.tenant_id.value,
            alias=result.alias,
            organization_name=result.organization_name,
            identity_provider_org_id=result.identity_provider_org_id,
            login_url=result.login_url,
        )
