"""SQLAlchemy ORM model for the tenants table.

Tenants represent customer organizations and map 1:1 onto an
organization in the identity provider.
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class TenantModel(Base, TimestampMixin):
    """ORM model for tenants table.

    Note: alias and identity_provider_org_id are each globally unique.
    owner_id is NULL only while a tenant is being provisioned.
    """

    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    identity_provider_org_id: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )
    alias: Mapped[str] = mapped_column(
        String(63), nullable=False, unique=True, index=True
    )
    display_name: Mapped[str] = mapped_column(String(150), nullable=False)
    owner_id: Mapped[str | None] = mapped_column(
        String(26), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    subscription_plan: Mapped[str] = mapped_column(String(32), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<TenantModel(id={self.id}, alias={self.alias})>"
