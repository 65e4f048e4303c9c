"""Domain event publisher dependency."""

from __future__ import annotations

from tenancy.application.listeners import TenantProvisionedListener
from tenancy.domain.events import TenantProvisioned
from tenancy.infrastructure.event_publisher import InProcessEventPublisher

# Module-level publisher instance (created on first use)
_event_publisher: InProcessEventPublisher | None = None


def get_event_publisher() -> InProcessEventPublisher:
    """Get the application-wide event publisher.

    The first call subscribes the in-tree listeners.
    """
    global _event_publisher
    if _event_publisher is None:
        _event_publisher = InProcessEventPublisher()
        _event_publisher.subscribe(TenantProvisioned, TenantProvisionedListener())
    return _event_publisher


async def close_event_publisher() -> None:
    """Cancel in-flight handlers. Called on application shutdown."""
    global _event_publisher
    if _event_publisher is not None:
        await _event_publisher.stop()
        _event_publisher = None
