"""Domain layer of the tenancy bounded context."""
