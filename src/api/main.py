"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from infrastructure.database.dependencies import (
    close_database_connections,
    get_session_factory,
)
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_onboarding_settings, get_settings
from infrastructure.version import __version__
from tenancy.dependencies.events import close_event_publisher, get_event_publisher
from tenancy.dependencies.identity_provider import close_identity_provider
from tenancy.infrastructure.alias_reservation_sweeper import AliasReservationSweeper
from tenancy.presentation import router as tenancy_router


@asynccontextmanager
async def onboarding_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Event publisher and its listeners
    - Alias reservation sweeper (expires stale RESERVED aliases)
    - Identity provider client and database pool shutdown
    """
    settings = get_settings()
    configure_logging(debug=settings.debug)
    probe = DefaultStartupProbe()
    probe.application_starting(app_name=settings.app_name, version=__version__)

    get_event_publisher()

    sweeper = AliasReservationSweeper(
        session_factory=get_session_factory(),
        interval_seconds=get_onboarding_settings().alias_sweep_interval_seconds,
    )
    await sweeper.start()
    probe.background_worker_started(worker="alias_reservation_sweeper")

    try:
        yield
    finally:
        await sweeper.stop()
        await close_event_publisher()
        await close_identity_provider()
        await close_database_connections()
        probe.application_stopped()


app = FastAPI(
    title="Tenant Onboarding API",
    description="Self-service tenant registration backed by an identity provider",
    version=__version__,
    lifespan=onboarding_lifespan,
)

# Include Tenancy bounded context routes
app.include_router(tenancy_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
