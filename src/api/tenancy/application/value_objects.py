"""Application-layer value objects for the tenancy bounded context.

These describe a single onboarding run: which steps exist, what the run
has created so far, and what the caller gets back on success.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from tenancy.domain.value_objects import ProvisionedIdentity, TenantId, UserId


class OnboardingStep(StrEnum):
    """Ordered steps of the tenant onboarding saga."""

    RESERVE_ALIAS = "reserve_alias"
    CREATE_ORGANIZATION = "create_organization"
    PROVISION_IDENTITY = "provision_identity"
    LINK_MEMBERSHIP = "link_membership"
    CREATE_TENANT = "create_tenant"
    UPSERT_USER = "upsert_user"
    ASSIGN_OWNER = "assign_owner"
    CONFIRM_ALIAS = "confirm_alias"
    EMIT_EVENT = "emit_event"


class CompensationAction(StrEnum):
    """Rollback actions, in the order they run."""

    DELETE_ORGANIZATION = "delete_organization"
    DELETE_IDENTITY = "delete_identity"
    RELEASE_ALIAS = "release_alias"


@dataclass
class OnboardingSagaState:
    """What a single onboarding run has created so far.

    Lives for exactly one call to register() and is never shared between
    runs. Compensation reads it to decide what to undo.
    """

    alias: str
    alias_reserved: bool = False
    organization_id: str | None = None
    identity: ProvisionedIdentity | None = None
    tenant_id: TenantId | None = None
    user_id: UserId | None = None


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of a successful tenant registration."""

    tenant_id: TenantId
    alias: str
    organization_name: str
    identity_provider_org_id: str
    login_url: str
