"""In-process listeners for tenancy domain events."""

from __future__ import annotations

from tenancy.application.observability import (
    DefaultTenantProvisionedListenerProbe,
    TenantProvisionedListenerProbe,
)
from tenancy.domain.events import TenantProvisioned


class TenantProvisionedListener:
    """Records every provisioned tenant in the activity log."""

    def __init__(self, probe: TenantProvisionedListenerProbe | None = None):
        self._probe = probe or DefaultTenantProvisionedListenerProbe()

    async def __call__(self, event: TenantProvisioned) -> None:
        self._probe.tenant_provisioned_received(
            tenant_id=event.tenant_id,
            organization_name=event.organization_name,
            admin_email=event.admin_email,
        )
