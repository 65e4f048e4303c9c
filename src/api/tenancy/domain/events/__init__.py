"""Domain events for the tenancy bounded context.

Domain events capture facts about things that have happened in the domain.
They are immutable value objects that carry all the information needed
to describe the occurrence of an event.
"""

from tenancy.domain.events.tenant import TenantProvisioned

# Type alias for all domain events in the tenancy context
DomainEvent = TenantProvisioned

__all__ = [
    "TenantProvisioned",
    "DomainEvent",
]
