"""Domain probe for tenancy repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to alias reservation, tenant and user
repository operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AliasReservationRepositoryProbe(Protocol):
    """Domain probe for alias reservation store operations."""

    def alias_reserved(self, alias: str) -> None:
        """Record that an alias was reserved."""
        ...

    def alias_taken(self, alias: str) -> None:
        """Record that a reservation lost to an existing claim."""
        ...

    def expired_reservation_replaced(self, alias: str) -> None:
        """Record that an expired claim was discarded before reserving."""
        ...

    def alias_confirmed(self, alias: str) -> None:
        """Record that an alias claim became permanent."""
        ...

    def alias_released(self, alias: str) -> None:
        """Record that an alias claim was deleted."""
        ...

    def expired_reservations_swept(self, count: int) -> None:
        """Record that expired claims were removed."""
        ...

    def with_context(
        self, context: ObservationContext
    ) -> AliasReservationRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class TenantRepositoryProbe(Protocol):
    """Domain probe for tenant repository operations."""

    def tenant_saved(self, tenant_id: str) -> None:
        """Record that a tenant was successfully saved."""
        ...

    def tenant_retrieved(self, tenant_id: str) -> None:
        """Record that a tenant was retrieved."""
        ...

    def duplicate_tenant(self, alias: str) -> None:
        """Record that a tenant collided on alias or organization id."""
        ...

    def tenant_owner_updated(self, tenant_id: str, user_id: str) -> None:
        """Record that a tenant's owner was set."""
        ...

    def with_context(self, context: ObservationContext) -> TenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class UserRepositoryProbe(Protocol):
    """Domain probe for user repository operations."""

    def user_created(self, user_id: str, email: str) -> None:
        """Record that a user row was created."""
        ...

    def user_memberships_updated(self, user_id: str, tenant_ids: list[str]) -> None:
        """Record that memberships were granted or merged."""
        ...

    def user_retrieved(self, user_id: str) -> None:
        """Record that a user was retrieved."""
        ...

    def concurrent_user_creation_detected(self, email: str) -> None:
        """Record that another request created the same user first."""
        ...

    def identity_already_linked(self, identity_provider_user_id: str) -> None:
        """Record that an identity provider user id is bound to another user."""
        ...

    def with_context(self, context: ObservationContext) -> UserRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAliasReservationRepositoryProbe:
    """Default implementation of AliasReservationRepositoryProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultAliasReservationRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultAliasReservationRepositoryProbe(
            logger=self._logger, context=context
        )

    def alias_reserved(self, alias: str) -> None:
        self._logger.info("alias_reserved", alias=alias, **self._get_context_kwargs())

    def alias_taken(self, alias: str) -> None:
        self._logger.warning("alias_taken", alias=alias, **self._get_context_kwargs())

    def expired_reservation_replaced(self, alias: str) -> None:
        self._logger.info(
            "expired_alias_reservation_replaced",
            alias=alias,
            **self._get_context_kwargs(),
        )

    def alias_confirmed(self, alias: str) -> None:
        self._logger.info("alias_confirmed", alias=alias, **self._get_context_kwargs())

    def alias_released(self, alias: str) -> None:
        self._logger.info("alias_released", alias=alias, **self._get_context_kwargs())

    def expired_reservations_swept(self, count: int) -> None:
        self._logger.info(
            "expired_alias_reservations_swept",
            count=count,
            **self._get_context_kwargs(),
        )


class DefaultTenantRepositoryProbe:
    """Default implementation of TenantRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantRepositoryProbe(logger=self._logger, context=context)

    def tenant_saved(self, tenant_id: str) -> None:
        """Record that a tenant was successfully saved."""
        self._logger.info(
            "tenant_saved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_retrieved(self, tenant_id: str) -> None:
        """Record that a tenant was retrieved."""
        self._logger.debug(
            "tenant_retrieved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def duplicate_tenant(self, alias: str) -> None:
        """Record that a tenant collided on alias or organization id."""
        self._logger.warning(
            "duplicate_tenant",
            alias=alias,
            **self._get_context_kwargs(),
        )

    def tenant_owner_updated(self, tenant_id: str, user_id: str) -> None:
        """Record that a tenant's owner was set."""
        self._logger.info(
            "tenant_owner_updated",
            tenant_id=tenant_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )


class DefaultUserRepositoryProbe:
    """Default implementation of UserRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserRepositoryProbe(logger=self._logger, context=context)

    def user_created(self, user_id: str, email: str) -> None:
        """Record that a user row was created."""
        self._logger.info(
            "user_created",
            user_id=user_id,
            email=email,
            **self._get_context_kwargs(),
        )

    def user_memberships_updated(self, user_id: str, tenant_ids: list[str]) -> None:
        """Record that memberships were granted or merged."""
        self._logger.info(
            "user_memberships_updated",
            user_id=user_id,
            tenant_ids=tenant_ids,
            **self._get_context_kwargs(),
        )

    def user_retrieved(self, user_id: str) -> None:
        """Record that a user was retrieved."""
        self._logger.debug(
            "user_retrieved",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def concurrent_user_creation_detected(self, email: str) -> None:
        """Record that another request created the same user first."""
        self._logger.info(
            "concurrent_user_creation_detected",
            email=email,
            **self._get_context_kwargs(),
        )

    def identity_already_linked(self, identity_provider_user_id: str) -> None:
        """Record that an identity provider user id is bound to another user."""
        self._logger.warning(
            "identity_already_linked",
            identity_provider_user_id=identity_provider_user_id,
            **self._get_context_kwargs(),
        )
