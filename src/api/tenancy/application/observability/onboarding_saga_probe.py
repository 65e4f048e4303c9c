"""Protocol for tenant onboarding saga observability.

Every step, compensation action and outcome of a registration is recorded
here. Failure detail is written to the operator log only and never
reaches the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class OnboardingSagaProbe(Protocol):
    """Domain probe for the tenant onboarding saga."""

    def registration_started(self, alias: str, email: str) -> None:
        """Record that a registration run began."""
        ...

    def step_started(self, step: str, alias: str) -> None:
        """Record that a saga step began."""
        ...

    def step_completed(self, step: str, alias: str) -> None:
        """Record that a saga step succeeded."""
        ...

    def step_failed(self, step: str, alias: str, error: Exception) -> None:
        """Record that a saga step raised."""
        ...

    def identity_reused(self, alias: str, identity_provider_user_id: str) -> None:
        """Record that an existing identity provider user was reused."""
        ...

    def identity_created(self, alias: str, identity_provider_user_id: str) -> None:
        """Record that a new identity provider user was created."""
        ...

    def compensation_started(self, alias: str) -> None:
        """Record that rollback began."""
        ...

    def compensation_action_completed(self, action: str, alias: str) -> None:
        """Record that a rollback action succeeded."""
        ...

    def compensation_action_failed(
        self, action: str, alias: str, error: Exception
    ) -> None:
        """Record that a rollback action raised."""
        ...

    def reused_identity_preserved(
        self, alias: str, identity_provider_user_id: str
    ) -> None:
        """Record that a reused identity was left in place during rollback."""
        ...

    def tenant_orphaned(self, alias: str, tenant_id: str) -> None:
        """Record that a tenant row outlived a failed registration."""
        ...

    def registration_succeeded(self, alias: str, tenant_id: str) -> None:
        """Record that a registration completed."""
        ...

    def registration_conflict(self, alias: str, error: Exception) -> None:
        """Record that a registration was rejected by a uniqueness rule."""
        ...

    def registration_failed(self, alias: str, error: Exception) -> None:
        """Record that a registration failed and was rolled back."""
        ...

    def event_emission_failed(self, tenant_id: str, error: Exception) -> None:
        """Record that the provisioned event could not be published."""
        ...

    def with_context(self, context: ObservationContext) -> OnboardingSagaProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultOnboardingSagaProbe:
    """Default implementation of OnboardingSagaProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultOnboardingSagaProbe:
        """Create a new probe with observation context bound."""
        return DefaultOnboardingSagaProbe(logger=self._logger, context=context)

    def registration_started(self, alias: str, email: str) -> None:
        self._logger.info(
            "tenant_registration_started",
            alias=alias,
            email=email,
            **self._get_context_kwargs(),
        )

    def step_started(self, step: str, alias: str) -> None:
        self._logger.debug(
            "onboarding_step_started",
            step=step,
            alias=alias,
            **self._get_context_kwargs(),
        )

    def step_completed(self, step: str, alias: str) -> None:
        self._logger.info(
            "onboarding_step_completed",
            step=step,
            alias=alias,
            **self._get_context_kwargs(),
        )

    def step_failed(self, step: str, alias: str, error: Exception) -> None:
        self._logger.warning(
            "onboarding_step_failed",
            step=step,
            alias=alias,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def identity_reused(self, alias: str, identity_provider_user_id: str) -> None:
        self._logger.info(
            "onboarding_identity_reused",
            alias=alias,
            identity_provider_user_id=identity_provider_user_id,
            **self._get_context_kwargs(),
        )

    def identity_created(self, alias: str, identity_provider_user_id: str) -> None:
        self._logger.info(
            "onboarding_identity_created",
            alias=alias,
            identity_provider_user_id=identity_provider_user_id,
            **self._get_context_kwargs(),
        )

    def compensation_started(self, alias: str) -> None:
        self._logger.warning(
            "onboarding_compensation_started",
            alias=alias,
            **self._get_context_kwargs(),
        )

    def compensation_action_completed(self, action: str, alias: str) -> None:
        self._logger.info(
            "onboarding_compensation_action_completed",
            action=action,
            alias=alias,
            **self._get_context_kwargs(),
        )

    def compensation_action_failed(
        self, action: str, alias: str, error: Exception
    ) -> None:
        self._logger.error(
            "onboarding_compensation_action_failed",
            action=action,
            alias=alias,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def reused_identity_preserved(
        self, alias: str, identity_provider_user_id: str
    ) -> None:
        self._logger.info(
            "onboarding_reused_identity_preserved",
            alias=alias,
            identity_provider_user_id=identity_provider_user_id,
            **self._get_context_kwargs(),
        )

    def tenant_orphaned(self, alias: str, tenant_id: str) -> None:
        self._logger.warning(
            "onboarding_tenant_orphaned",
            alias=alias,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def registration_succeeded(self, alias: str, tenant_id: str) -> None:
        self._logger.info(
            "tenant_registration_succeeded",
            alias=alias,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def registration_conflict(self, alias: str, error: Exception) -> None:
        self._logger.warning(
            "tenant_registration_conflict",
            alias=alias,
            error=str(error),
            **self._get_context_kwargs(),
        )

    def registration_failed(self, alias: str, error: Exception) -> None:
        self._logger.error(
            "tenant_registration_failed",
            alias=alias,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def event_emission_failed(self, tenant_id: str, error: Exception) -> None:
        self._logger.error(
            "tenant_provisioned_event_emission_failed",
            tenant_id=tenant_id,
            error=str(error),
            **self._get_context_kwargs(),
        )
