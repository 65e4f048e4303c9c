"""Domain probe for application startup and lifecycle events.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events during application initialization and shutdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StartupProbe(Protocol):
    """Domain probe for application startup operations."""

    def application_starting(self, app_name: str, version: str) -> None:
        """Record that the application lifespan has started."""
        ...

    def background_worker_started(self, worker: str) -> None:
        """Record that a background worker was started."""
        ...

    def application_stopped(self) -> None:
        """Record that the application has released its resources."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def application_starting(self, app_name: str, version: str) -> None:
        """Record that the application lifespan has started."""
        self._logger.info(
            "application_starting",
            app_name=app_name,
            version=version,
            **self._get_context_kwargs(),
        )

    def background_worker_started(self, worker: str) -> None:
        """Record that a background worker was started."""
        self._logger.info(
            "background_worker_started",
            worker=worker,
            **self._get_context_kwargs(),
        )

    def application_stopped(self) -> None:
        """Record that the application has released its resources."""
        self._logger.info(
            "application_stopped",
            **self._get_context_kwargs(),
        )
