"""Unit tests for TenantRepository."""

from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.exc import IntegrityError

from tenancy.domain.aggregates import Tenant
from tenancy.domain.value_objects import (
    SubscriptionPlan,
    TenantId,
    TenantStatus,
    UserId,
)
from tenancy.infrastructure.models import TenantModel
from tenancy.infrastructure.observability import TenantRepositoryProbe
from tenancy.infrastructure.tenant_repository import TenantRepository
from tenancy.ports.exceptions import DuplicateTenantError
from tenancy.ports.repositories import ITenantRepository


@pytest.fixture
def mock_probe():
    return Mock(spec=TenantRepositoryProbe)


@pytest.fixture
def repository(mock_session, mock_probe):
    return TenantRepository(session=mock_session, probe=mock_probe)


@pytest.fixture
def tenant():
    return Tenant.provision(
        alias="acme", display_name="Acme Inc", identity_provider_org_id="org-1"
    )


def make_model(tenant_id: TenantId, owner_id: str | None = None) -> TenantModel:
    return TenantModel(
        id=tenant_id.value,
        identity_provider_org_id="org-1",
        alias="acme",
        display_name="Acme Inc",
        owner_id=owner_id,
        subscription_plan="FREE",
        status="ACTIVE",
    )


class TestProtocolCompliance:
    def test_implements_protocol(self, repository):
        assert isinstance(repository, ITenantRepository)


class TestSave:
    """Tests for save method."""

    @pytest.mark.asyncio
    async def test_adds_new_tenant(self, repository, mock_session, mock_probe, tenant):
        await repository.save(tenant)

        mock_session.add.assert_called_once()
        model = mock_session.add.call_args[0][0]
        assert isinstance(model, TenantModel)
        assert model.alias == "acme"
        assert model.owner_id is None
        assert model.subscription_plan == "FREE"
        mock_session.flush.assert_awaited_once()
        mock_probe.tenant_saved.assert_called_once_with(tenant.id.value)

    @pytest.mark.asyncio
    async def test_updates_existing_tenant(
        self, repository, mock_session, tenant, execute_result
    ):
        existing = make_model(tenant.id)
        mock_session.execute = AsyncMock(return_value=execute_result(scalar=existing))
        tenant.display_name = "Acme Corporation"
        tenant.assign_owner(UserId.generate())

        await repository.save(tenant)

        mock_session.add.assert_not_called()
        assert existing.display_name == "Acme Corporation"
        assert existing.owner_id == tenant.owner_id.value

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "index", ["ix_tenants_alias", "ix_tenants_identity_provider_org_id"]
    )
    async def test_unique_index_violation_raises_duplicate(
        self, repository, mock_session, mock_probe, tenant, integrity_error, index
    ):
        mock_session.flush = AsyncMock(side_effect=integrity_error(index))

        with pytest.raises(DuplicateTenantError):
            await repository.save(tenant)

        mock_probe.duplicate_tenant.assert_called_once_with("acme")

    @pytest.mark.asyncio
    async def test_other_integrity_errors_propagate(
        self, repository, mock_session, tenant, integrity_error
    ):
        mock_session.flush = AsyncMock(side_effect=integrity_error("fk_tenants_owner"))

        with pytest.raises(IntegrityError):
            await repository.save(tenant)


class TestGetters:
    @pytest.mark.asyncio
    async def test_get_by_id_returns_none_when_missing(self, repository):
        assert await repository.get_by_id(TenantId.generate()) is None

    @pytest.mark.asyncio
    async def test_get_by_alias_maps_model(
        self, repository, mock_session, mock_probe, execute_result
    ):
        tenant_id = TenantId.generate()
        owner_id = UserId.generate()
        mock_session.execute = AsyncMock(
            return_value=execute_result(scalar=make_model(tenant_id, owner_id.value))
        )

        tenant = await repository.get_by_alias("acme")

        assert tenant.id == tenant_id
        assert tenant.owner_id == owner_id
        assert tenant.subscription_plan == SubscriptionPlan.FREE
        assert tenant.status == TenantStatus.ACTIVE
        mock_probe.tenant_retrieved.assert_called_once_with(tenant_id.value)

    @pytest.mark.asyncio
    async def test_get_by_identity_provider_org_id(
        self, repository, mock_session, execute_result
    ):
        tenant_id = TenantId.generate()
        mock_session.execute = AsyncMock(
            return_value=execute_result(scalar=make_model(tenant_id))
        )

        tenant = await repository.get_by_identity_provider_org_id("org-1")

        assert tenant.identity_provider_org_id == "org-1"
        assert tenant.owner_id is None


class TestUpdateOwner:
    @pytest.mark.asyncio
    async def test_sets_owner(self, repository, mock_session, mock_probe, execute_result):
        tenant_id = TenantId.generate()
        user_id = UserId.generate()
        mock_session.execute = AsyncMock(return_value=execute_result(rowcount=1))

        await repository.update_owner(tenant_id, user_id)

        mock_probe.tenant_owner_updated.assert_called_once_with(
            tenant_id.value, user_id.value
        )

    @pytest.mark.asyncio
    async def test_missing_tenant_raises_lookup_error(
        self, repository, mock_session, execute_result
    ):
        mock_session.execute = AsyncMock(return_value=execute_result(rowcount=0))

        with pytest.raises(LookupError):
            await repository.update_owner(TenantId.generate(), UserId.generate())
