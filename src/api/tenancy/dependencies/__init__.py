"""FastAPI dependency providers for the tenancy bounded context."""
