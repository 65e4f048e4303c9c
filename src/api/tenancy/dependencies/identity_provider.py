"""Identity provider gateway dependency.

A single KeycloakAdminClient is shared by all requests so its token cache
and connection pool are reused.
"""

from __future__ import annotations

from infrastructure.settings import get_identity_provider_settings
from tenancy.infrastructure.keycloak import KeycloakAdminClient
from tenancy.ports.identity_provider import IIdentityProviderGateway

# Module-level client instance (created on first use)
_identity_provider: KeycloakAdminClient | None = None


def get_identity_provider() -> IIdentityProviderGateway:
    """Get the shared identity provider gateway.

    Returns:
        KeycloakAdminClient configured from ONBOARDING_IDP_* settings
    """
    global _identity_provider
    if _identity_provider is None:
        _identity_provider = KeycloakAdminClient.from_settings(
            get_identity_provider_settings()
        )
    return _identity_provider


async def close_identity_provider() -> None:
    """Close the shared client. Called on application shutdown."""
    global _identity_provider
    if _identity_provider is not None:
        await _identity_provider.aclose()
        _identity_provider = None
