"""Keycloak implementation of the identity provider gateway.

Talks to the Keycloak Admin REST API with a service account obtained
through the client credentials grant. The access token is cached until
shortly before it expires; an admin call answered with 401 triggers one
re-authentication and a single retry.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

import httpx

from tenancy.infrastructure.observability import (
    DefaultIdentityProviderProbe,
    IdentityProviderProbe,
)
from tenancy.ports.exceptions import (
    IdentityProviderConflictError,
    IdentityProviderError,
    IdentityProviderUnavailableError,
)
from tenancy.ports.identity_provider import (
    IdentityProviderOrganization,
    IdentityProviderUser,
    IIdentityProviderGateway,
)

if TYPE_CHECKING:
    from infrastructure.settings import IdentityProviderSettings


class KeycloakAdminClient(IIdentityProviderGateway):
    """Identity provider gateway backed by the Keycloak Admin REST API.

    One instance is shared by the whole application; it owns a pooled
    httpx.AsyncClient that must be closed with aclose() on shutdown.
    """

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str,
        probe: IdentityProviderProbe | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float = 10.0,
        token_refresh_margin: timedelta = timedelta(seconds=30),
    ):
        """Initialize the Keycloak admin client.

        Args:
            server_url: Base URL of the Keycloak server
            realm: Realm that holds tenant organizations and users
            client_id: Service account client id
            client_secret: Service account client secret
            probe: Optional domain probe for observability
            http_client: Optional preconfigured client (used by tests)
            timeout_seconds: Timeout applied to every request
            token_refresh_margin: Refresh the token this long before expiry
        """
        self._server_url = server_url.rstrip("/")
        self._realm = realm
        self._client_id = client_id
        self._client_secret = client_secret
        self._probe = probe or DefaultIdentityProviderProbe()
        self._client = http_client or httpx.AsyncClient(timeout=timeout_seconds)
        self._token_refresh_margin = token_refresh_margin

        self._access_token: str | None = None
        self._token_expires_at: datetime | None = None
        self._token_lock = asyncio.Lock()

    @classmethod
    def from_settings(
        cls,
        settings: IdentityProviderSettings,
        probe: IdentityProviderProbe | None = None,
    ) -> KeycloakAdminClient:
        """Build a client from application settings."""
        return cls(
            server_url=settings.server_url,
            realm=settings.realm,
            client_id=settings.client_id,
            client_secret=settings.client_secret.get_secret_value(),
            probe=probe,
            timeout_seconds=settings.timeout_seconds,
        )

    @property
    def _admin_url(self) -> str:
        return f"{self._server_url}/admin/realms/{self._realm}"

    @property
    def _token_url(self) -> str:
        return f"{self._server_url}/realms/{self._realm}/protocol/openid-connect/token"

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    async def create_organization(
        self, name: str, alias: str
    ) -> IdentityProviderOrganization:
        """Create an organization whose alias doubles as its domain."""
        payload = {
            "name": name,
            "alias": alias,
            "enabled": True,
            "domains": [{"name": alias, "verified": False}],
        }
        response = await self._request("POST", "/organizations", json=payload)
        self._raise_for_status(response, "POST", "/organizations")

        organization_id = self._id_from_location(response, "/organizations")
        self._probe.organization_created(organization_id=organization_id, alias=alias)
        return IdentityProviderOrganization(id=organization_id, name=name, alias=alias)

    async def delete_organization(self, organization_id: str) -> None:
        path = f"/organizations/{organization_id}"
        response = await self._request("DELETE", path)
        if response.status_code == 404:
            self._probe.resource_already_absent("organization", organization_id)
            return
        self._raise_for_status(response, "DELETE", path)
        self._probe.organization_deleted(organization_id=organization_id)

    async def find_user_by_email(self, email: str) -> IdentityProviderUser | None:
        response = await self._request(
            "GET", "/users", params={"email": email, "exact": "true"}
        )
        self._raise_for_status(response, "GET", "/users")

        users = response.json()
        if not users:
            return None

        user = users[0]
        return IdentityProviderUser(
            id=user["id"],
            email=user.get("email", email),
            first_name=user.get("firstName", ""),
            last_name=user.get("lastName", ""),
        )

    async def create_user(
        self, email: str, password: str, full_name: str
    ) -> IdentityProviderUser:
        """Create an enabled user with a verified email and permanent password."""
        first_name, _, last_name = full_name.partition(" ")
        payload = {
            "username": email,
            "email": email,
            "firstName": first_name,
            "lastName": last_name,
            "enabled": True,
            "emailVerified": True,
            "credentials": [
                {"type": "password", "value": password, "temporary": False}
            ],
        }
        response = await self._request("POST", "/users", json=payload)
        self._raise_for_status(response, "POST", "/users")

        user_id = self._id_from_location(response, "/users")
        self._probe.user_created(user_id=user_id, email=email)
        return IdentityProviderUser(
            id=user_id, email=email, first_name=first_name, last_name=last_name
        )

    async def delete_user(self, user_id: str) -> None:
        path = f"/users/{user_id}"
        response = await self._request("DELETE", path)
        if response.status_code == 404:
            self._probe.resource_already_absent("user", user_id)
            return
        self._raise_for_status(response, "DELETE", path)
        self._probe.user_deleted(user_id=user_id)

    async def add_user_to_organization(
        self, organization_id: str, user_id: str
    ) -> None:
        path = f"/organizations/{organization_id}/members"
        response = await self._request("POST", path, json=user_id)
        self._raise_for_status(response, "POST", path)
        self._probe.user_added_to_organization(
            organization_id=organization_id, user_id=user_id
        )

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send an authenticated admin request, re-authenticating once on 401.

        Raises:
            IdentityProviderUnavailableError: On transport failure or timeout
        """
        url = f"{self._admin_url}{path}"
        token = await self._get_access_token()
        try:
            response = await self._client.request(
                method, url, headers=self._auth_headers(token), **kwargs
            )
            if response.status_code == 401:
                self._probe.access_token_rejected(method=method, path=path)
                token = await self._get_access_token(rejected=token)
                response = await self._client.request(
                    method, url, headers=self._auth_headers(token), **kwargs
                )
        except httpx.TransportError as e:
            self._probe.request_failed(
                method=method, path=path, status_code=None, error=str(e)
            )
            raise IdentityProviderUnavailableError(
                f"Identity provider unreachable: {e}"
            ) from e

        return response

    async def _get_access_token(self, rejected: str | None = None) -> str:
        """Return a valid service account token.

        Args:
            rejected: A token the server refused; it is never returned again
        """
        if self._is_token_valid() and self._access_token != rejected:
            return self._access_token  # type: ignore[return-value]

        async with self._token_lock:
            # Double-check after acquiring lock
            if self._is_token_valid() and self._access_token != rejected:
                return self._access_token  # type: ignore[return-value]

            return await self._fetch_access_token()

    def _is_token_valid(self) -> bool:
        if self._access_token is None or self._token_expires_at is None:
            return False
        return datetime.now(tz=timezone.utc) < self._token_expires_at

    async def _fetch_access_token(self) -> str:
        data = {
            "grant_type": "client_credentials",
            "client_id": self._client_id,
            "client_secret": self._client_secret,
        }
        try:
            response = await self._client.post(self._token_url, data=data)
        except httpx.TransportError as e:
            self._probe.request_failed(
                method="POST", path="/token", status_code=None, error=str(e)
            )
            raise IdentityProviderUnavailableError(
                f"Identity provider unreachable: {e}"
            ) from e

        self._raise_for_status(response, "POST", "/token")

        body = response.json()
        expires_in = int(body.get("expires_in", 60))
        self._access_token = body["access_token"]
        self._token_expires_at = (
            datetime.now(tz=timezone.utc)
            + timedelta(seconds=expires_in)
            - self._token_refresh_margin
        )
        self._probe.access_token_acquired(expires_in=expires_in)
        return self._access_token

    def _raise_for_status(self, response: httpx.Response, method: str, path: str) -> None:
        """Translate a non-2xx response into a gateway exception."""
        if response.is_success:
            return

        status = response.status_code
        self._probe.request_failed(
            method=method, path=path, status_code=status, error=response.text
        )
        if status == 409:
            raise IdentityProviderConflictError()
        if status >= 500:
            raise IdentityProviderUnavailableError(
                f"Identity provider failed with {status} on {method} {path}",
                status_code=status,
            )
        raise IdentityProviderError(
            f"Identity provider rejected {method} {path} with {status}",
            status_code=status,
        )

    @staticmethod
    def _id_from_location(response: httpx.Response, path: str) -> str:
        location = response.headers.get("Location")
        if not location:
            raise IdentityProviderError(
                f"Identity provider did not return a Location for POST {path}"
            )
        return location.rstrip("/").rsplit("/", 1)[-1]

    @staticmethod
    def _auth_headers(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}
