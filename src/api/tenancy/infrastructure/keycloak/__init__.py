"""Keycloak adapter for the identity provider gateway."""

from tenancy.infrastructure.keycloak.client import KeycloakAdminClient

__all__ = ["KeycloakAdminClient"]
