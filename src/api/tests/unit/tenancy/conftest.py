"""In-memory doubles for the tenancy ports.

The onboarding saga's properties (rollback, alias exclusion, identity
reuse, expiry) are checked against these fakes. Each fake yields to the
event loop on every call so concurrent registrations interleave the way
they would against real I/O.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta
from itertools import count
from typing import Sequence
from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from tenancy.application.observability import OnboardingSagaProbe
from tenancy.application.services import TenantOnboardingService
from tenancy.domain.aggregates import AliasReservation, Tenant, User
from tenancy.domain.value_objects import (
    TenantId,
    TenantMembership,
    UserId,
    UserProfile,
)
from tenancy.ports.exceptions import (
    AliasAlreadyTakenError,
    DuplicateTenantError,
    IdentityProviderConflictError,
)
from tenancy.ports.identity_provider import (
    IdentityProviderOrganization,
    IdentityProviderUser,
)


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, now: datetime | None = None):
        self.now = now or datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class FakeAliasReservationStore:
    """Dict-backed alias store; the dict insert is the uniqueness check."""

    def __init__(self, clock: FakeClock, ttl: timedelta = timedelta(minutes=30)):
        self._clock = clock
        self._ttl = ttl
        self.reservations: dict[str, AliasReservation] = {}

    async def reserve(self, alias: str) -> AliasReservation:
        await asyncio.sleep(0)
        now = self._clock()
        existing = self.reservations.get(alias)
        if existing is not None and existing.is_expired(now):
            del self.reservations[alias]
        if alias in self.reservations:
            raise AliasAlreadyTakenError(alias)
        reservation = AliasReservation.reserve(alias, ttl=self._ttl, now=now)
        self.reservations[alias] = reservation
        return reservation

    async def confirm(self, alias: str) -> None:
        await asyncio.sleep(0)
        reservation = self.reservations.get(alias)
        if reservation is not None:
            reservation.confirm()

    async def delete(self, alias: str) -> None:
        await asyncio.sleep(0)
        self.reservations.pop(alias, None)

    async def get(self, alias: str) -> AliasReservation | None:
        return self.reservations.get(alias)

    async def sweep_expired(self, now: datetime) -> int:
        expired = [a for a, r in self.reservations.items() if r.is_expired(now)]
        for alias in expired:
            del self.reservations[alias]
        return len(expired)


class FakeIdentityProvider:
    """Identity provider holding organizations, users and memberships."""

    def __init__(self):
        self._ids = count(1)
        self.organizations: dict[str, IdentityProviderOrganization] = {}
        self.users: dict[str, IdentityProviderUser] = {}
        self.members: set[tuple[str, str]] = set()
        self.created_user_ids: list[str] = []

    async def create_organization(
        self, name: str, alias: str
    ) -> IdentityProviderOrganization:
        await asyncio.sleep(0)
        if any(org.alias == alias for org in self.organizations.values()):
            raise IdentityProviderConflictError(f"Organization {alias} exists")
        organization = IdentityProviderOrganization(
            id=f"org-{next(self._ids)}", name=name, alias=alias
        )
        self.organizations[organization.id] = organization
        return organization

    async def delete_organization(self, organization_id: str) -> None:
        await asyncio.sleep(0)
        self.organizations.pop(organization_id, None)
        self.members = {m for m in self.members if m[0] != organization_id}

    async def find_user_by_email(self, email: str) -> IdentityProviderUser | None:
        await asyncio.sleep(0)
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    async def create_user(
        self, email: str, password: str, full_name: str
    ) -> IdentityProviderUser:
        await asyncio.sleep(0)
        if any(user.email == email for user in self.users.values()):
            raise IdentityProviderConflictError(f"User {email} exists")
        first_name, _, last_name = full_name.partition(" ")
        user = IdentityProviderUser(
            id=f"user-{next(self._ids)}",
            email=email,
            first_name=first_name,
            last_name=last_name,
        )
        self.users[user.id] = user
        self.created_user_ids.append(user.id)
        return user

    async def delete_user(self, user_id: str) -> None:
        await asyncio.sleep(0)
        self.users.pop(user_id, None)

    async def add_user_to_organization(
        self, organization_id: str, user_id: str
    ) -> None:
        await asyncio.sleep(0)
        self.members.add((organization_id, user_id))

    def seed_user(self, email: str) -> IdentityProviderUser:
        user = IdentityProviderUser(id=f"user-{next(self._ids)}", email=email)
        self.users[user.id] = user
        return user


class FakeTenantRepository:
    def __init__(self):
        self.tenants: dict[str, Tenant] = {}

    async def save(self, tenant: Tenant) -> None:
        await asyncio.sleep(0)
        for other in self.tenants.values():
            if other.id != tenant.id and other.alias == tenant.alias:
                raise DuplicateTenantError(tenant.alias)
        self.tenants[tenant.id.value] = tenant

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        return self.tenants.get(tenant_id.value)

    async def get_by_alias(self, alias: str) -> Tenant | None:
        return next((t for t in self.tenants.values() if t.alias == alias), None)

    async def get_by_identity_provider_org_id(self, org_id: str) -> Tenant | None:
        return next(
            (t for t in self.tenants.values() if t.identity_provider_org_id == org_id),
            None,
        )

    async def update_owner(self, tenant_id: TenantId, user_id: UserId) -> None:
        await asyncio.sleep(0)
        tenant = self.tenants.get(tenant_id.value)
        if tenant is None:
            raise LookupError(tenant_id.value)
        tenant.owner_id = user_id


class FakeUserRepository:
    def __init__(self):
        self.users: dict[str, User] = {}

    async def get_by_id(self, user_id: UserId) -> User | None:
        return self.users.get(user_id.value)

    async def get_by_email(self, email: str) -> User | None:
        return next((u for u in self.users.values() if u.email == email), None)

    async def upsert_with_tenant_membership(
        self,
        identity_provider_user_id: str,
        email: str,
        profile: UserProfile,
        memberships: Sequence[TenantMembership],
    ) -> User:
        await asyncio.sleep(0)
        user = await self.get_by_email(email)
        if user is None:
            user = User.register(
                email=email,
                identity_provider_user_id=identity_provider_user_id,
                profile=profile,
            )
            self.users[user.id.value] = user
        for membership in memberships:
            user.grant_membership(membership)
        return user


class RecordingEventPublisher:
    def __init__(self):
        self.published: list = []

    def subscribe(self, event_type, handler) -> None:
        pass

    def publish(self, event) -> None:
        self.published.append(event)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def alias_store(clock) -> FakeAliasReservationStore:
    return FakeAliasReservationStore(clock)


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def tenant_repository() -> FakeTenantRepository:
    return FakeTenantRepository()


@pytest.fixture
def user_repository() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def event_publisher() -> RecordingEventPublisher:
    return RecordingEventPublisher()


@pytest.fixture
def mock_session():
    """Mock AsyncSession."""
    session = Mock(spec=AsyncSession)

    # Create async context manager mock
    ctx_manager = AsyncMock()
    ctx_manager.__aenter__ = AsyncMock(return_value=None)
    ctx_manager.__aexit__ = AsyncMock(return_value=None)

    session.begin = Mock(return_value=ctx_manager)
    return session


@pytest.fixture
def saga_probe():
    """Mock OnboardingSagaProbe."""
    return Mock(spec=OnboardingSagaProbe)


@pytest.fixture
def onboarding_service(
    alias_store,
    tenant_repository,
    user_repository,
    identity_provider,
    event_publisher,
    mock_session,
    saga_probe,
) -> TenantOnboardingService:
    return TenantOnboardingService(
        alias_reservation_repository=alias_store,
        tenant_repository=tenant_repository,
        user_repository=user_repository,
        identity_provider=identity_provider,
        event_publisher=event_publisher,
        session=mock_session,
        probe=saga_probe,
    )
