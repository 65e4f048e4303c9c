"""In-process domain event publisher.

Handlers run as independent asyncio tasks. publish() returns as soon as
the tasks are scheduled, so a slow or failing handler never delays or
fails the code that raised the event.
"""

from __future__ import annotations

import asyncio
from collections import defaultdict

from tenancy.domain.events import DomainEvent
from tenancy.infrastructure.observability import (
    DefaultEventPublisherProbe,
    EventPublisherProbe,
)
from tenancy.ports.events import EventHandler, IDomainEventPublisher


class InProcessEventPublisher(IDomainEventPublisher):
    """Fire-and-forget publisher dispatching to subscribed coroutines.

    Delivery is at-most-once: events are not persisted, and tasks still
    pending at shutdown are cancelled by stop().
    """

    def __init__(self, probe: EventPublisherProbe | None = None) -> None:
        self._probe = probe or DefaultEventPublisherProbe()
        self._handlers: dict[type, list[EventHandler]] = defaultdict(list)
        self._tasks: set[asyncio.Task] = set()

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """Register a handler for an event type."""
        self._handlers[event_type].append(handler)

    def publish(self, event: DomainEvent) -> None:
        """Schedule every handler for the event and return immediately.

        Must be called from within a running event loop.
        """
        handlers = self._handlers.get(type(event), [])
        for handler in handlers:
            task = asyncio.create_task(self._dispatch(handler, event))
            # Keep a reference so the task is not garbage collected mid-flight
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

        self._probe.event_published(
            event_type=type(event).__name__, handler_count=len(handlers)
        )

    async def drain(self) -> None:
        """Wait for all scheduled handlers to finish."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def stop(self) -> None:
        """Cancel handlers that have not finished yet."""
        for task in list(self._tasks):
            task.cancel()
        await self.drain()

    async def _dispatch(self, handler: EventHandler, event: DomainEvent) -> None:
        try:
            await handler(event)
        except Exception as e:
            self._probe.handler_failed(
                event_type=type(event).__name__,
                handler=getattr(handler, "__qualname__", type(handler).__name__),
                error=str(e),
            )
