"""SQLAlchemy ORM model for the tenant_alias_reservations table.

The alias is the primary key, which makes the insert itself the only
arbiter between concurrent reservations of the same alias.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, utc_now


class AliasReservationModel(Base):
    """ORM model for tenant_alias_reservations table."""

    __tablename__ = "tenant_alias_reservations"

    alias: Mapped[str] = mapped_column(String(63), primary_key=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), insert_default=utc_now, nullable=False
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<AliasReservationModel(alias={self.alias}, status={self.status})>"
