"""SQLAlchemy ORM models for the tenancy bounded context.

These models map to database tables and are used by repository implementations.
"""

from tenancy.infrastructure.models.alias_reservation import AliasReservationModel
from tenancy.infrastructure.models.tenant import TenantModel
from tenancy.infrastructure.models.user import TenantMembershipModel, UserModel

__all__ = [
    "AliasReservationModel",
    "TenantMembershipModel",
    "TenantModel",
    "UserModel",
]
