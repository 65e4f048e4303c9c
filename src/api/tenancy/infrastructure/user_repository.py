"""PostgreSQL implementation of IUserRepository.

Users are looked up by email, which is unique across the directory.
Tenant memberships live in their own table with one row per
(user, tenant) pair.
"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tenancy.domain.aggregates import User
from tenancy.domain.value_objects import (
    PlatformRole,
    TenantId,
    TenantMembership,
    TenantRole,
    UserId,
    UserProfile,
    UserStatus,
)
from tenancy.infrastructure.models import TenantMembershipModel, UserModel
from tenancy.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from tenancy.ports.exceptions import DuplicateUserError
from tenancy.ports.repositories import IUserRepository


class UserRepository(IUserRepository):
    """Repository managing PostgreSQL storage for User aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: UserRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultUserRepositoryProbe()

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Fetch a user by ID with memberships loaded."""
        model = await self._get_model(UserModel.id == user_id.value)
        if model is None:
            return None

        self._probe.user_retrieved(model.id)
        return self._to_domain(model)

    async def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email with memberships loaded."""
        model = await self._get_model(UserModel.email == email)
        if model is None:
            return None

        self._probe.user_retrieved(model.id)
        return self._to_domain(model)

    async def upsert_with_tenant_membership(
        self,
        identity_provider_user_id: str,
        email: str,
        profile: UserProfile,
        memberships: Sequence[TenantMembership],
    ) -> User:
        """Create the user if no user owns the email, then grant memberships.

        An existing user keeps its profile; only memberships are added or
        merged.

        Raises:
            DuplicateUserError: If the identity provider user id is already
                bound to a different email
        """
        model = await self._get_model(UserModel.email == email)
        if model is None:
            model = await self._create_model(identity_provider_user_id, email, profile)

        user = self._to_domain(model)
        granted = [
            membership.tenant_id.value
            for membership in memberships
            if user.grant_membership(membership)
        ]

        if granted:
            self._apply_memberships(model, user)
            await self._session.flush()
            self._probe.user_memberships_updated(user.id.value, granted)

        return user

    async def _create_model(
        self,
        identity_provider_user_id: str,
        email: str,
        profile: UserProfile,
    ) -> UserModel:
        """Insert a new user row, falling back to a concurrently created one."""
        user = User.register(
            email=email,
            identity_provider_user_id=identity_provider_user_id,
            profile=profile,
        )
        model = UserModel(
            id=user.id.value,
            email=user.email,
            identity_provider_user_id=user.identity_provider_user_id,
            first_name=user.profile.first_name,
            last_name=user.profile.last_name,
            platform_role=user.profile.platform_role.value,
            status=user.profile.status.value,
            memberships=[],
        )
        try:
            async with self._session.begin_nested():
                self._session.add(model)
                await self._session.flush()
        except IntegrityError as e:
            if "ix_users_email" not in str(e):
                self._probe.identity_already_linked(identity_provider_user_id)
                raise DuplicateUserError() from e

            # Another request created the same user first
            self._probe.concurrent_user_creation_detected(email)
            existing = await self._get_model(UserModel.email == email)
            if existing is None:
                raise
            return existing

        self._probe.user_created(model.id, email)
        return model

    async def _get_model(self, criterion) -> UserModel | None:
        stmt = select(UserModel).where(criterion)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _apply_memberships(model: UserModel, user: User) -> None:
        """Write the aggregate's memberships onto the ORM rows."""
        rows = {row.tenant_id: row for row in model.memberships}
        for membership in user.memberships:
            roles = sorted(role.value for role in membership.roles)
            row = rows.get(membership.tenant_id.value)
            if row is None:
                model.memberships.append(
                    TenantMembershipModel(
                        tenant_id=membership.tenant_id.value,
                        roles=roles,
                        joined_at=membership.joined_at,
                    )
                )
            else:
                row.roles = roles
                row.joined_at = membership.joined_at

    @staticmethod
    def _to_domain(model: UserModel) -> User:
        return User(
            id=UserId(value=model.id),
            email=model.email,
            identity_provider_user_id=model.identity_provider_user_id,
            profile=UserProfile(
                first_name=model.first_name,
                last_name=model.last_name,
                platform_role=PlatformRole(model.platform_role),
                status=UserStatus(model.status),
            ),
            memberships=[
                TenantMembership(
                    tenant_id=TenantId(value=row.tenant_id),
                    roles=frozenset(TenantRole(role) for role in row.roles),
                    joined_at=row.joined_at,
                )
                for row in model.memberships
            ],
        )
