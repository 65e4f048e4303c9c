"""Domain-Oriented Observability for the tenancy application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from tenancy.application.observability.listener_probe import (
    DefaultTenantProvisionedListenerProbe,
    TenantProvisionedListenerProbe,
)
from tenancy.application.observability.onboarding_saga_probe import (
    DefaultOnboardingSagaProbe,
    OnboardingSagaProbe,
)
from tenancy.application.observability.tenant_service_probe import (
    DefaultTenantServiceProbe,
    TenantServiceProbe,
)

__all__ = [
    "OnboardingSagaProbe",
    "DefaultOnboardingSagaProbe",
    "TenantServiceProbe",
    "DefaultTenantServiceProbe",
    "TenantProvisionedListenerProbe",
    "DefaultTenantProvisionedListenerProbe",
]
