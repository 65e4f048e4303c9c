"""create tenant_alias_reservations table

The alias is the primary key, so concurrent reservations of the same
alias are decided by the insert alone. expires_at is indexed for the
sweep of expired RESERVED rows.

Revision ID: 8e4d2b6f1a93
Revises: 3c9f1a7e5b20
Create Date: 2026-09-02 11:05:44.120937

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "8e4d2b6f1a93"
down_revision: Union[str, Sequence[str], None] = "3c9f1a7e5b20"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "tenant_alias_reservations",
        sa.Column("alias", sa.String(length=63), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("alias", name="pk_tenant_alias_reservations"),
    )
    op.create_index(
        "ix_tenant_alias_reservations_expires_at",
        "tenant_alias_reservations",
        ["expires_at"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(
        "ix_tenant_alias_reservations_expires_at",
        table_name="tenant_alias_reservations",
    )
    op.drop_table("tenant_alias_reservations")
