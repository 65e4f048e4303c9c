"""Tenant onboarding saga for the tenancy bounded context.

Registers a new tenant across two independent systems, the identity
provider and the local store, through an ordered sequence of steps. When
a step fails, everything the run created is undone in a fixed order.
"""

from __future__ import annotations

from datetime import UTC, datetime
from functools import partial
from typing import Any, Awaitable, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from tenancy.application.observability import (
    DefaultOnboardingSagaProbe,
    OnboardingSagaProbe,
)
from tenancy.application.value_objects import (
    CompensationAction,
    OnboardingSagaState,
    OnboardingStep,
    RegistrationResult,
)
from tenancy.domain.aggregates import Tenant, User
from tenancy.domain.events import TenantProvisioned
from tenancy.domain.value_objects import (
    CreatedIdentity,
    ProvisionedIdentity,
    ReusedIdentity,
    TenantMembership,
    UserProfile,
)
from tenancy.ports.events import IDomainEventPublisher
from tenancy.ports.exceptions import ConflictError, ProvisioningError
from tenancy.ports.identity_provider import IIdentityProviderGateway
from tenancy.ports.repositories import (
    IAliasReservationRepository,
    ITenantRepository,
    IUserRepository,
)

T = TypeVar("T")

DEFAULT_ROOT_DOMAIN = "crm.com"


class TenantOnboardingService:
    """Application service running the tenant onboarding saga.

    Steps run strictly in order and each local-store step commits in its
    own transaction. The only coordination between concurrent runs is the
    alias reservation's uniqueness constraint; saga state is held in an
    OnboardingSagaState created per call.

    Task cancellation is not an Exception and does not trigger
    compensation. A run interrupted that way is recovered only by the
    alias reservation expiring.
    """

    def __init__(
        self,
        alias_reservation_repository: IAliasReservationRepository,
        tenant_repository: ITenantRepository,
        user_repository: IUserRepository,
        identity_provider: IIdentityProviderGateway,
        event_publisher: IDomainEventPublisher,
        session: AsyncSession,
        root_domain: str = DEFAULT_ROOT_DOMAIN,
        probe: OnboardingSagaProbe | None = None,
    ):
        """Initialize TenantOnboardingService with dependencies.

        Args:
            alias_reservation_repository: Store holding alias claims
            tenant_repository: Repository for tenant persistence
            user_repository: Repository for users and memberships
            identity_provider: Gateway to the identity provider
            event_publisher: Publisher for domain events
            session: Database session for transaction management
            root_domain: Domain under which tenant login URLs are built
            probe: Optional domain probe for observability
        """
        self._alias_reservations = alias_reservation_repository
        self._tenant_repository = tenant_repository
        self._user_repository = user_repository
        self._identity_provider = identity_provider
        self._event_publisher = event_publisher
        self._session = session
        self._root_domain = root_domain
        self._probe = probe or DefaultOnboardingSagaProbe()

    async def register(
        self,
        email: str,
        password: str,
        full_name: str,
        organization_name: str,
        alias: str,
    ) -> RegistrationResult:
        """Register a new tenant and its owning user.

        Inputs are expected to be validated for shape already.

        Args:
            email: Email of the owning user
            password: Password for a newly created identity
            full_name: Full name of the owning user
            organization_name: Display name of the organization
            alias: Globally unique tenant alias

        Returns:
            RegistrationResult with tenant id, alias, organization name,
            identity provider organization id and login URL

        Raises:
            ConflictError: If the alias or identity is already taken. Raised
                at the first step nothing is created; raised later, the run
                is rolled back first.
            ProvisioningError: For any other failure, after rollback
        """
        state = OnboardingSagaState(alias=alias)
        self._probe.registration_started(alias=alias, email=email)

        try:
            await self._step(
                state,
                OnboardingStep.RESERVE_ALIAS,
                partial(self._in_transaction, self._alias_reservations.reserve, alias),
            )
        except ConflictError as error:
            self._probe.registration_conflict(alias=alias, error=error)
            raise
        except Exception as error:
            self._probe.registration_failed(alias=alias, error=error)
            raise ProvisioningError() from error
        state.alias_reserved = True

        try:
            tenant, user = await self._provision(
                state,
                email=email,
                password=password,
                full_name=full_name,
                organization_name=organization_name,
            )
        except Exception as error:
            await self._compensate(state)
            if isinstance(error, ConflictError):
                self._probe.registration_conflict(alias=alias, error=error)
                raise
            self._probe.registration_failed(alias=alias, error=error)
            raise ProvisioningError() from error

        self._emit_provisioned(tenant, organization_name=organization_name, email=email)
        self._probe.registration_succeeded(alias=alias, tenant_id=tenant.id.value)

        return RegistrationResult(
            tenant_id=tenant.id,
            alias=alias,
            organization_name=organization_name,
            identity_provider_org_id=tenant.identity_provider_org_id,
            login_url=self.login_url(alias),
        )

    def login_url(self, alias: str) -> str:
        """Build the login URL of a tenant."""
        return f"https://{alias}.{self._root_domain}/login"

    async def _provision(
        self,
        state: OnboardingSagaState,
        email: str,
        password: str,
        full_name: str,
        organization_name: str,
    ) -> tuple[Tenant, User]:
        """Run the steps between reserving and confirming the alias."""
        organization = await self._step(
            state,
            OnboardingStep.CREATE_ORGANIZATION,
            partial(
                self._identity_provider.create_organization,
                name=organization_name,
                alias=state.alias,
            ),
        )
        state.organization_id = organization.id

        state.identity = await self._step(
            state,
            OnboardingStep.PROVISION_IDENTITY,
            partial(
                self._provision_identity,
                state,
                email=email,
                password=password,
                full_name=full_name,
            ),
        )
        identity_provider_user_id = state.identity.user_id

        await self._step(
            state,
            OnboardingStep.LINK_MEMBERSHIP,
            partial(
                self._identity_provider.add_user_to_organization,
                organization_id=organization.id,
                user_id=identity_provider_user_id,
            ),
        )

        tenant = Tenant.provision(
            alias=state.alias,
            display_name=organization_name,
            identity_provider_org_id=organization.id,
        )
        await self._step(
            state,
            OnboardingStep.CREATE_TENANT,
            partial(self._in_transaction, self._tenant_repository.save, tenant),
        )
        state.tenant_id = tenant.id

        user = await self._step(
            state,
            OnboardingStep.UPSERT_USER,
            partial(
                self._in_transaction,
                self._user_repository.upsert_with_tenant_membership,
                identity_provider_user_id=identity_provider_user_id,
                email=email,
                profile=UserProfile.from_full_name(full_name),
                memberships=[TenantMembership.owner(tenant.id)],
            ),
        )
        state.user_id = user.id

        await self._step(
            state,
            OnboardingStep.ASSIGN_OWNER,
            partial(
                self._in_transaction,
                self._tenant_repository.update_owner,
                tenant.id,
                user.id,
            ),
        )
        tenant.assign_owner(user.id)

        await self._step(
            state,
            OnboardingStep.CONFIRM_ALIAS,
            partial(self._in_transaction, self._alias_reservations.confirm, state.alias),
        )

        return tenant, user

    async def _provision_identity(
        self,
        state: OnboardingSagaState,
        email: str,
        password: str,
        full_name: str,
    ) -> ProvisionedIdentity:
        """Find the identity provider user by email, or create one."""
        existing = await self._identity_provider.find_user_by_email(email)
        if existing is not None:
            self._probe.identity_reused(
                alias=state.alias, identity_provider_user_id=existing.id
            )
            return ReusedIdentity(user_id=existing.id)

        created = await self._identity_provider.create_user(
            email=email, password=password, full_name=full_name
        )
        self._probe.identity_created(
            alias=state.alias, identity_provider_user_id=created.id
        )
        return CreatedIdentity(user_id=created.id)

    async def _compensate(self, state: OnboardingSagaState) -> list[Exception]:
        """Undo what this run created.

        Every action is attempted even when an earlier one fails.

        Returns:
            The failures raised by individual actions
        """
        self._probe.compensation_started(alias=state.alias)
        failures: list[Exception] = []

        if state.organization_id is not None:
            await self._attempt(
                state,
                CompensationAction.DELETE_ORGANIZATION,
                partial(self._identity_provider.delete_organization, state.organization_id),
                failures,
            )

        match state.identity:
            case CreatedIdentity(user_id=user_id):
                await self._attempt(
                    state,
                    CompensationAction.DELETE_IDENTITY,
                    partial(self._identity_provider.delete_user, user_id),
                    failures,
                )
            case ReusedIdentity(user_id=user_id):
                self._probe.reused_identity_preserved(
                    alias=state.alias, identity_provider_user_id=user_id
                )

        if state.alias_reserved:
            await self._attempt(
                state,
                CompensationAction.RELEASE_ALIAS,
                partial(self._in_transaction, self._alias_reservations.delete, state.alias),
                failures,
            )

        # Local tenant rows are not rolled back; they are removed out-of-band.
        if state.tenant_id is not None:
            self._probe.tenant_orphaned(alias=state.alias, tenant_id=state.tenant_id.value)

        return failures

    async def _attempt(
        self,
        state: OnboardingSagaState,
        action: CompensationAction,
        operation: Callable[[], Awaitable[Any]],
        failures: list[Exception],
    ) -> None:
        """Run one compensation action, recording instead of raising failures."""
        try:
            await operation()
        except Exception as error:
            self._probe.compensation_action_failed(
                action=action, alias=state.alias, error=error
            )
            failures.append(error)
            return
        self._probe.compensation_action_completed(action=action, alias=state.alias)

    async def _step(
        self,
        state: OnboardingSagaState,
        step: OnboardingStep,
        operation: Callable[[], Awaitable[T]],
    ) -> T:
        """Run one saga step, recording its start and outcome."""
        self._probe.step_started(step=step, alias=state.alias)
        try:
            result = await operation()
        except Exception as error:
            self._probe.step_failed(step=step, alias=state.alias, error=error)
            raise
        self._probe.step_completed(step=step, alias=state.alias)
        return result

    async def _in_transaction(
        self, operation: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any
    ) -> T:
        """Run a store operation in its own committed transaction."""
        async with self._session.begin():
            return await operation(*args, **kwargs)

    def _emit_provisioned(
        self, tenant: Tenant, organization_name: str, email: str
    ) -> None:
        """Publish TenantProvisioned. Failures are logged and never raised."""
        event = TenantProvisioned(
            tenant_id=tenant.id.value,
            organization_name=organization_name,
            admin_email=email,
            occurred_at=datetime.now(UTC),
        )
        try:
            self._event_publisher.publish(event)
        except Exception as error:
            self._probe.event_emission_failed(tenant_id=tenant.id.value, error=error)
            return
        self._probe.step_completed(step=OnboardingStep.EMIT_EVENT, alias=tenant.alias)
