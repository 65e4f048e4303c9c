"""Domain probes for tenancy background work.

Covers the alias reservation sweeper and the in-process event publisher,
both of which run outside any request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class SweeperProbe(Protocol):
    """Domain probe for the alias reservation sweeper."""

    def sweeper_started(self, interval_seconds: float) -> None:
        ...

    def sweeper_stopped(self) -> None:
        ...

    def sweep_failed(self, error: str) -> None:
        """Record that a sweep pass raised. The sweeper keeps running."""
        ...

    def with_context(self, context: ObservationContext) -> SweeperProbe:
        """Create a new probe with observation context bound."""
        ...


class EventPublisherProbe(Protocol):
    """Domain probe for in-process event delivery."""

    def event_published(self, event_type: str, handler_count: int) -> None:
        ...

    def handler_failed(self, event_type: str, handler: str, error: str) -> None:
        """Record that a handler raised while processing an event."""
        ...

    def with_context(self, context: ObservationContext) -> EventPublisherProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultSweeperProbe:
    """Default implementation of SweeperProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultSweeperProbe:
        return DefaultSweeperProbe(logger=self._logger, context=context)

    def sweeper_started(self, interval_seconds: float) -> None:
        self._logger.info(
            "alias_reservation_sweeper_started",
            interval_seconds=interval_seconds,
            **self._get_context_kwargs(),
        )

    def sweeper_stopped(self) -> None:
        self._logger.info(
            "alias_reservation_sweeper_stopped",
            **self._get_context_kwargs(),
        )

    def sweep_failed(self, error: str) -> None:
        self._logger.error(
            "alias_reservation_sweep_failed",
            error=error,
            **self._get_context_kwargs(),
        )


class DefaultEventPublisherProbe:
    """Default implementation of EventPublisherProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultEventPublisherProbe:
        return DefaultEventPublisherProbe(logger=self._logger, context=context)

    def event_published(self, event_type: str, handler_count: int) -> None:
        self._logger.debug(
            "domain_event_published",
            event_type=event_type,
            handler_count=handler_count,
            **self._get_context_kwargs(),
        )

    def handler_failed(self, event_type: str, handler: str, error: str) -> None:
        self._logger.error(
            "domain_event_handler_failed",
            event_type=event_type,
            handler=handler,
            error=error,
            **self._get_context_kwargs(),
        )
