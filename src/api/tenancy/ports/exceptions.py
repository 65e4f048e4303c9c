"""Domain exceptions for the tenancy bounded context.

These exceptions represent domain-level errors raised by repositories and
the identity provider gateway. The onboarding saga normalizes them into
exactly two caller-visible outcomes: ConflictError and ProvisioningError.
"""


class ConflictError(Exception):
    """Raised when a uniqueness rule is violated.

    Conflicts are never retried automatically. The caller should choose a
    different alias or identity. Like ProvisioningError, the default
    message is safe to show to callers; identifiers stay in the log.
    """

    DEFAULT_MESSAGE = (
        "An account or organization with these details already exists."
    )

    def __init__(self, message: str = DEFAULT_MESSAGE):
        super().__init__(message)


class AliasAlreadyTakenError(ConflictError):
    """Raised when an alias is already RESERVED or CONFIRMED."""

    def __init__(self, alias: str):
        self.alias = alias
        super().__init__(f'Organization alias "{alias}" is already taken.')


class DuplicateTenantError(ConflictError):
    """Raised when a tenant with the same alias or identity provider organization exists."""

    pass


class DuplicateUserError(ConflictError):
    """Raised when a user row collides on email or identity provider user id.

    The user repository resolves the email race internally; this surfaces
    only when the collision cannot be merged.
    """

    pass


class ProvisioningError(Exception):
    """Raised when tenant registration fails for any non-conflict reason.

    The message is safe to show to callers. Step-level detail is only
    available in the operator log and through the exception chain.
    """

    DEFAULT_MESSAGE = (
        "Tenant registration failed. All partial changes have been rolled back."
    )

    def __init__(self, message: str = DEFAULT_MESSAGE):
        super().__init__(message)


class IdentityProviderError(Exception):
    """Raised when the identity provider rejects a request.

    Attributes:
        status_code: HTTP status returned by the identity provider, if any
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class IdentityProviderUnavailableError(IdentityProviderError):
    """Raised when the identity provider cannot be reached or times out."""

    pass


class IdentityProviderConflictError(ConflictError):
    """Raised when the identity provider reports the resource already exists."""

    pass
