"""Probe for in-process domain event listeners."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantProvisionedListenerProbe(Protocol):
    """Domain probe for reactions to a provisioned tenant."""

    def tenant_provisioned_received(
        self, tenant_id: str, organization_name: str, admin_email: str
    ) -> None:
        """Record that a provisioned tenant was observed."""
        ...

    def with_context(
        self, context: ObservationContext
    ) -> TenantProvisionedListenerProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantProvisionedListenerProbe:
    """Default implementation of TenantProvisionedListenerProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultTenantProvisionedListenerProbe:
        return DefaultTenantProvisionedListenerProbe(
            logger=self._logger, context=context
        )

    def tenant_provisioned_received(
        self, tenant_id: str, organization_name: str, admin_email: str
    ) -> None:
        self._logger.info(
            "tenant_provisioned",
            tenant_id=tenant_id,
            organization_name=organization_name,
            admin_email=admin_email,
            **self._get_context_kwargs(),
        )
