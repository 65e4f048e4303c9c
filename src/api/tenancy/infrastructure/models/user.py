"""SQLAlchemy ORM models for the users and tenant_memberships tables.

A user's tenant memberships are stored as one row per (user, tenant)
pair, with the roles held in that tenant as a JSON list.
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import Base, TimestampMixin, utc_now


class UserModel(Base, TimestampMixin):
    """ORM model for users table."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True, index=True
    )
    identity_provider_user_id: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    platform_role: Mapped[str] = mapped_column(String(32), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False)

    # Relationships
    memberships: Mapped[list["TenantMembershipModel"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<UserModel(id={self.id}, email={self.email})>"


class TenantMembershipModel(Base):
    """ORM model for tenant_memberships table.

    Note: (user_id, tenant_id) is unique, so a user can never hold two
    membership rows for the same tenant.
    """

    __tablename__ = "tenant_memberships"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "tenant_id", name="uq_tenant_memberships_user_tenant"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    tenant_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    roles: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), insert_default=utc_now, nullable=False
    )

    user: Mapped[UserModel] = relationship(back_populates="memberships")

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<TenantMembershipModel(user_id={self.user_id}, "
            f"tenant_id={self.tenant_id}, roles={self.roles})>"
        )
