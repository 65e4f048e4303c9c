"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        ONBOARDING_DB_HOST: Database host (default: localhost)
        ONBOARDING_DB_PORT: Database port (default: 5432)
        ONBOARDING_DB_DATABASE: Database name (default: onboarding)
        ONBOARDING_DB_USERNAME: Database user (default: onboarding)
        ONBOARDING_DB_PASSWORD: Database password (required in production)
        ONBOARDING_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="ONBOARDING_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="onboarding", description="Database name")
    username: str = Field(default="onboarding", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class IdentityProviderSettings(BaseSettings):
    """Keycloak admin API settings.

    The service account identified by client_id/client_secret must be allowed
    to manage users and organizations in the realm.

    Environment variables:
        ONBOARDING_IDP_SERVER_URL: Keycloak base URL (default: http://localhost:8080)
        ONBOARDING_IDP_REALM: Realm holding organizations and users
        ONBOARDING_IDP_CLIENT_ID: Service account client ID
        ONBOARDING_IDP_CLIENT_SECRET: Service account client secret
        ONBOARDING_IDP_TIMEOUT_SECONDS: Per-request timeout (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="ONBOARDING_IDP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    server_url: str = Field(
        default="http://localhost:8080", description="Keycloak base URL"
    )
    realm: str = Field(default="onboarding", description="Keycloak realm")
    client_id: str = Field(default="onboarding-admin", description="Client ID")
    client_secret: SecretStr = Field(
        default=SecretStr(""),
        description="Client secret",
    )
    timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for each admin API request",
        gt=0,
    )


class OnboardingSettings(BaseSettings):
    """Tenant onboarding settings.

    Environment variables:
        ONBOARDING_ROOT_DOMAIN: Domain under which tenant subdomains live (default: crm.com)
        ONBOARDING_ALIAS_RESERVATION_TTL_MINUTES: Lifetime of an unconfirmed
            alias reservation (default: 30)
        ONBOARDING_ALIAS_SWEEP_INTERVAL_SECONDS: How often expired reservations
            are swept (default: 60)
    """

    model_config = SettingsConfigDict(
        env_prefix="ONBOARDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    root_domain: str = Field(
        default="crm.com",
        description="Root domain used to build tenant login URLs",
    )
    alias_reservation_ttl_minutes: int = Field(
        default=30,
        description="Minutes before an unconfirmed alias reservation expires",
        ge=1,
    )
    alias_sweep_interval_seconds: int = Field(
        default=60,
        description="Interval between expired reservation sweeps",
        ge=1,
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Tenant Onboarding API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_identity_provider_settings() -> IdentityProviderSettings:
    """Get cached identity provider settings."""
    return IdentityProviderSettings()


@lru_cache
def get_onboarding_settings() -> OnboardingSettings:
    """Get cached onboarding settings."""
    return OnboardingSettings()
