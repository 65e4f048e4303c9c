"""Tenant domain events for the tenancy context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TenantProvisioned:
    """Event raised when a tenant has been fully onboarded.

    Emitted once, after the alias reservation is confirmed. Consumers
    (welcome mail, activity log) receive it at most once.

    Attributes:
        tenant_id: The ULID of the provisioned tenant
        organization_name: Display name of the organization
        admin_email: Email of the owning user
        occurred_at: When the event occurred (UTC)
    """

    tenant_id: str
    organization_name: str
    admin_email: str
    occurred_at: datetime
