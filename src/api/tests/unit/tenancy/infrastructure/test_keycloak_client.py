"""Unit tests for KeycloakAdminClient.

Requests are served by an httpx.MockTransport standing in for Keycloak.
"""

from __future__ import annotations

import json
from unittest.mock import Mock

import httpx
import pytest

from tenancy.infrastructure.keycloak import KeycloakAdminClient
from tenancy.infrastructure.observability import IdentityProviderProbe
from tenancy.ports.exceptions import (
    IdentityProviderConflictError,
    IdentityProviderError,
    IdentityProviderUnavailableError,
)
from tenancy.ports.identity_provider import IIdentityProviderGateway

SERVER = "https://keycloak.test"
ADMIN = f"{SERVER}/admin/realms/crm"
TOKEN_PATH = "/realms/crm/protocol/openid-connect/token"


class FakeKeycloak:
    """Routes requests to per-path handlers and records what it saw."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], list[httpx.Response]] = {}
        self.tokens_issued = 0

    def route(self, method: str, path: str, *responses: httpx.Response) -> None:
        self.routes[(method, path)] = list(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == TOKEN_PATH:
            self.tokens_issued += 1
            return httpx.Response(
                200,
                json={
                    "access_token": f"token-{self.tokens_issued}",
                    "expires_in": 300,
                },
            )

        responses = self.routes[(request.method, request.url.path)]
        return responses.pop(0) if len(responses) > 1 else responses[0]

    def admin_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path != TOKEN_PATH]


@pytest.fixture
def keycloak() -> FakeKeycloak:
    return FakeKeycloak()


@pytest.fixture
def mock_probe():
    return Mock(spec=IdentityProviderProbe)


@pytest.fixture
def client(keycloak, mock_probe) -> KeycloakAdminClient:
    return KeycloakAdminClient(
        server_url=f"{SERVER}/",
        realm="crm",
        client_id="onboarding",
        client_secret="secret",
        probe=mock_probe,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(keycloak)),
    )


def created(location: str) -> httpx.Response:
    return httpx.Response(201, headers={"Location": location})


class TestProtocolCompliance:
    def test_implements_protocol(self, client):
        assert isinstance(client, IIdentityProviderGateway)


class TestAccessToken:
    @pytest.mark.asyncio
    async def test_token_is_fetched_once_and_reused(self, client, keycloak):
        keycloak.route("GET", "/admin/realms/crm/users", httpx.Response(200, json=[]))

        await client.find_user_by_email("a@acme.io")
        await client.find_user_by_email("b@acme.io")

        assert keycloak.tokens_issued == 1
        token_request = keycloak.requests[0]
        assert b"grant_type=client_credentials" in token_request.content
        for request in keycloak.admin_requests():
            assert request.headers["Authorization"] == "Bearer token-1"

    @pytest.mark.asyncio
    async def test_rejected_token_is_refreshed_and_request_retried(
        self, client, keycloak, mock_probe
    ):
        keycloak.route(
            "GET",
            "/admin/realms/crm/users",
            httpx.Response(401),
            httpx.Response(200, json=[]),
        )

        assert await client.find_user_by_email("a@acme.io") is None

        assert keycloak.tokens_issued == 2
        retried = keycloak.admin_requests()[-1]
        assert retried.headers["Authorization"] == "Bearer token-2"
        mock_probe.access_token_rejected.assert_called_once_with(
            method="GET", path="/users"
        )

    @pytest.mark.asyncio
    async def test_second_rejection_is_not_retried(self, client, keycloak):
        keycloak.route("GET", "/admin/realms/crm/users", httpx.Response(401))

        with pytest.raises(IdentityProviderError) as exc_info:
            await client.find_user_by_email("a@acme.io")

        assert exc_info.value.status_code == 401
        assert len(keycloak.admin_requests()) == 2


class TestOrganizations:
    @pytest.mark.asyncio
    async def test_create_organization_parses_location(self, client, keycloak):
        keycloak.route(
            "POST",
            "/admin/realms/crm/organizations",
            created(f"{ADMIN}/organizations/org-123"),
        )

        organization = await client.create_organization("Acme Inc", "acme")

        assert organization.id == "org-123"
        assert organization.alias == "acme"
        body = json.loads(keycloak.admin_requests()[0].content)
        assert body["alias"] == "acme"
        assert body["domains"] == [{"name": "acme", "verified": False}]

    @pytest.mark.asyncio
    async def test_conflict_maps_to_conflict_error(self, client, keycloak):
        keycloak.route(
            "POST", "/admin/realms/crm/organizations", httpx.Response(409)
        )

        with pytest.raises(IdentityProviderConflictError):
            await client.create_organization("Acme Inc", "acme")

    @pytest.mark.asyncio
    async def test_missing_location_is_an_error(self, client, keycloak):
        keycloak.route(
            "POST", "/admin/realms/crm/organizations", httpx.Response(201)
        )

        with pytest.raises(IdentityProviderError):
            await client.create_organization("Acme Inc", "acme")

    @pytest.mark.asyncio
    async def test_delete_of_absent_organization_succeeds(
        self, client, keycloak, mock_probe
    ):
        keycloak.route(
            "DELETE", "/admin/realms/crm/organizations/org-1", httpx.Response(404)
        )

        await client.delete_organization("org-1")

        mock_probe.resource_already_absent.assert_called_once_with(
            "organization", "org-1"
        )

    @pytest.mark.asyncio
    async def test_add_member_posts_user_id(self, client, keycloak):
        keycloak.route(
            "POST",
            "/admin/realms/crm/organizations/org-1/members",
            httpx.Response(201),
        )

        await client.add_user_to_organization("org-1", "user-1")

        assert json.loads(keycloak.admin_requests()[0].content) == "user-1"


class TestUsers:
    @pytest.mark.asyncio
    async def test_find_user_by_email_uses_exact_match(self, client, keycloak):
        keycloak.route(
            "GET",
            "/admin/realms/crm/users",
            httpx.Response(
                200,
                json=[
                    {
                        "id": "user-1",
                        "email": "jane@acme.io",
                        "firstName": "Jane",
                        "lastName": "Doe",
                    }
                ],
            ),
        )

        user = await client.find_user_by_email("jane@acme.io")

        assert user.id == "user-1"
        assert user.first_name == "Jane"
        params = keycloak.admin_requests()[0].url.params
        assert params["email"] == "jane@acme.io"
        assert params["exact"] == "true"

    @pytest.mark.asyncio
    async def test_create_user_sets_permanent_password(self, client, keycloak):
        keycloak.route(
            "POST", "/admin/realms/crm/users", created(f"{ADMIN}/users/user-9")
        )

        user = await client.create_user("jane@acme.io", "S3cret!pw", "Jane Ann Doe")

        assert user.id == "user-9"
        body = json.loads(keycloak.admin_requests()[0].content)
        assert body["username"] == "jane@acme.io"
        assert body["firstName"] == "Jane"
        assert body["lastName"] == "Ann Doe"
        assert body["emailVerified"] is True
        assert body["credentials"] == [
            {"type": "password", "value": "S3cret!pw", "temporary": False}
        ]

    @pytest.mark.asyncio
    async def test_delete_of_absent_user_succeeds(self, client, keycloak):
        keycloak.route("DELETE", "/admin/realms/crm/users/user-1", httpx.Response(404))

        await client.delete_user("user-1")

    @pytest.mark.asyncio
    async def test_user_conflict_message_hides_admin_endpoint(
        self, client, keycloak, mock_probe
    ):
        keycloak.route("POST", "/admin/realms/crm/users", httpx.Response(409))

        with pytest.raises(IdentityProviderConflictError) as exc_info:
            await client.create_user("jane@acme.io", "S3cret!pw", "Jane Doe")

        assert str(exc_info.value) == IdentityProviderConflictError.DEFAULT_MESSAGE
        assert "/users" not in str(exc_info.value)
        mock_probe.request_failed.assert_called_once()
        assert mock_probe.request_failed.call_args.kwargs["status_code"] == 409
        assert "users" in mock_probe.request_failed.call_args.kwargs["path"]

    @pytest.mark.asyncio
    async def test_server_error_maps_to_unavailable(self, client, keycloak):
        keycloak.route("DELETE", "/admin/realms/crm/users/user-1", httpx.Response(503))

        with pytest.raises(IdentityProviderUnavailableError) as exc_info:
            await client.delete_user("user-1")

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_client_error_maps_to_gateway_error(self, client, keycloak):
        keycloak.route("POST", "/admin/realms/crm/users", httpx.Response(400))

        with pytest.raises(IdentityProviderError) as exc_info:
            await client.create_user("jane@acme.io", "S3cret!pw", "Jane Doe")

        assert not isinstance(exc_info.value, IdentityProviderUnavailableError)


class TestTransportFailure:
    @pytest.mark.asyncio
    async def test_unreachable_server_maps_to_unavailable(self, mock_probe):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = KeycloakAdminClient(
            server_url=SERVER,
            realm="crm",
            client_id="onboarding",
            client_secret="secret",
            probe=mock_probe,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(refuse)),
        )

        with pytest.raises(IdentityProviderUnavailableError):
            await client.find_user_by_email("jane@acme.io")
