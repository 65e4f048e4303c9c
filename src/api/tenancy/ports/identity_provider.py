"""Identity provider gateway port.

The identity provider is the external system of record for organizations,
users and authentication. Resilience (retry, backoff) belongs to the
implementation, not the callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class IdentityProviderOrganization:
    """An organization as known to the identity provider."""

    id: str
    name: str
    alias: str


@dataclass(frozen=True)
class IdentityProviderUser:
    """A user as known to the identity provider."""

    id: str
    email: str
    first_name: str = ""
    last_name: str = ""


@runtime_checkable
class IIdentityProviderGateway(Protocol):
    """Operations the onboarding saga needs from the identity provider."""

    async def create_organization(
        self, name: str, alias: str
    ) -> IdentityProviderOrganization:
        """Create an organization.

        Raises:
            IdentityProviderConflictError: If the name or alias is already taken
            IdentityProviderError: On any other failure
        """
        ...

    async def delete_organization(self, organization_id: str) -> None:
        """Delete an organization. Deleting a missing organization succeeds."""
        ...

    async def find_user_by_email(self, email: str) -> IdentityProviderUser | None:
        """Look up a user by exact email."""
        ...

    async def create_user(
        self, email: str, password: str, full_name: str
    ) -> IdentityProviderUser:
        """Create a user with a permanent password.

        Raises:
            IdentityProviderConflictError: If the user already exists
        """
        ...

    async def delete_user(self, user_id: str) -> None:
        """Delete a user. Deleting a missing user succeeds."""
        ...

    async def add_user_to_organization(
        self, organization_id: str, user_id: str
    ) -> None:
        """Make the user a member of the organization."""
        ...
