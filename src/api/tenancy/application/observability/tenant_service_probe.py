"""Protocol for tenant read service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantServiceProbe(Protocol):
    """Domain probe for tenant read operations."""

    def tenant_retrieved(self, tenant_id: str) -> None:
        """Record that a tenant was retrieved."""
        ...

    def tenant_not_found(self, lookup: str, value: str) -> None:
        """Record that a tenant lookup found nothing."""
        ...

    def with_context(self, context: ObservationContext) -> TenantServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantServiceProbe:
    """Default implementation of TenantServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultTenantServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantServiceProbe(logger=self._logger, context=context)

    def tenant_retrieved(self, tenant_id: str) -> None:
        """Record that a tenant was retrieved."""
        self._logger.debug(
            "tenant_retrieved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, lookup: str, value: str) -> None:
        """Record that a tenant lookup found nothing."""
        self._logger.debug(
            "tenant_not_found",
            lookup=lookup,
            value=value,
            **self._get_context_kwargs(),
        )
