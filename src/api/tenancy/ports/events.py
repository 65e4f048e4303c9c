"""Domain event publishing port."""

from __future__ import annotations

from typing import Awaitable, Callable, Protocol, runtime_checkable

from tenancy.domain.events import DomainEvent

EventHandler = Callable[[DomainEvent], Awaitable[None]]


@runtime_checkable
class IDomainEventPublisher(Protocol):
    """Fire-and-forget delivery of domain events to in-process handlers."""

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """Register a handler for an event type."""
        ...

    def publish(self, event: DomainEvent) -> None:
        """Schedule delivery of an event and return without waiting.

        Delivery is at-most-once; handler failures never reach the caller.
        """
        ...
