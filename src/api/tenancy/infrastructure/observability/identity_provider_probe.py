"""Domain probe for the identity provider admin client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class IdentityProviderProbe(Protocol):
    """Domain probe for calls to the identity provider admin API."""

    def access_token_acquired(self, expires_in: int) -> None:
        """Record that a service account token was obtained."""
        ...

    def access_token_rejected(self, method: str, path: str) -> None:
        """Record that an admin call returned 401 and will be retried."""
        ...

    def organization_created(self, organization_id: str, alias: str) -> None:
        ...

    def organization_deleted(self, organization_id: str) -> None:
        ...

    def user_created(self, user_id: str, email: str) -> None:
        ...

    def user_deleted(self, user_id: str) -> None:
        ...

    def user_added_to_organization(self, organization_id: str, user_id: str) -> None:
        ...

    def resource_already_absent(self, resource: str, resource_id: str) -> None:
        """Record that a delete found nothing to remove."""
        ...

    def request_failed(
        self, method: str, path: str, status_code: int | None, error: str
    ) -> None:
        """Record that an admin call failed."""
        ...

    def with_context(self, context: ObservationContext) -> IdentityProviderProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultIdentityProviderProbe:
    """Default implementation of IdentityProviderProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultIdentityProviderProbe:
        """Create a new probe with observation context bound."""
        return DefaultIdentityProviderProbe(logger=self._logger, context=context)

    def access_token_acquired(self, expires_in: int) -> None:
        self._logger.debug(
            "identity_provider_token_acquired",
            expires_in=expires_in,
            **self._get_context_kwargs(),
        )

    def access_token_rejected(self, method: str, path: str) -> None:
        self._logger.info(
            "identity_provider_token_rejected",
            method=method,
            path=path,
            **self._get_context_kwargs(),
        )

    def organization_created(self, organization_id: str, alias: str) -> None:
        self._logger.info(
            "identity_provider_organization_created",
            organization_id=organization_id,
            alias=alias,
            **self._get_context_kwargs(),
        )

    def organization_deleted(self, organization_id: str) -> None:
        self._logger.info(
            "identity_provider_organization_deleted",
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def user_created(self, user_id: str, email: str) -> None:
        self._logger.info(
            "identity_provider_user_created",
            user_id=user_id,
            email=email,
            **self._get_context_kwargs(),
        )

    def user_deleted(self, user_id: str) -> None:
        self._logger.info(
            "identity_provider_user_deleted",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_added_to_organization(self, organization_id: str, user_id: str) -> None:
        self._logger.info(
            "identity_provider_user_added_to_organization",
            organization_id=organization_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def resource_already_absent(self, resource: str, resource_id: str) -> None:
        self._logger.debug(
            "identity_provider_resource_already_absent",
            resource=resource,
            resource_id=resource_id,
            **self._get_context_kwargs(),
        )

    def request_failed(
        self, method: str, path: str, status_code: int | None, error: str
    ) -> None:
        self._logger.error(
            "identity_provider_request_failed",
            method=method,
            path=path,
            status_code=status_code,
            error=error,
            **self._get_context_kwargs(),
        )
