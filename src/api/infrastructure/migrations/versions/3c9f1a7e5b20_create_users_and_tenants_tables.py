"""create users, tenants and tenant_memberships tables

Users mirror identities held by the identity provider. Tenants map 1:1
onto identity provider organizations. Memberships link the two, one row
per (user, tenant) pair.

Revision ID: 3c9f1a7e5b20
Revises:
Create Date: 2026-09-02 10:41:07.513224

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3c9f1a7e5b20"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("identity_provider_user_id", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("platform_role", sa.String(length=32), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index(
        "ix_users_identity_provider_user_id",
        "users",
        ["identity_provider_user_id"],
        unique=True,
    )

    op.create_table(
        "tenants",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("identity_provider_org_id", sa.String(length=255), nullable=False),
        sa.Column("alias", sa.String(length=63), nullable=False),
        sa.Column("display_name", sa.String(length=150), nullable=False),
        sa.Column("owner_id", sa.String(length=26), nullable=True),
        sa.Column("subscription_plan", sa.String(length=32), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_tenants"),
        sa.ForeignKeyConstraint(
            ["owner_id"],
            ["users.id"],
            name="fk_tenants_owner_id_users",
            ondelete="SET NULL",
        ),
    )
    # Aliases are globally unique and case-sensitive
    op.create_index("ix_tenants_alias", "tenants", ["alias"], unique=True)
    op.create_index(
        "ix_tenants_identity_provider_org_id",
        "tenants",
        ["identity_provider_org_id"],
        unique=True,
    )

    op.create_table(
        "tenant_memberships",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=26), nullable=False),
        sa.Column("tenant_id", sa.String(length=26), nullable=False),
        sa.Column("roles", sa.JSON(), nullable=False),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_tenant_memberships"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_tenant_memberships_user_id_users",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["tenant_id"],
            ["tenants.id"],
            name="fk_tenant_memberships_tenant_id_tenants",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint(
            "user_id", "tenant_id", name="uq_tenant_memberships_user_tenant"
        ),
    )
    op.create_index(
        "ix_tenant_memberships_tenant_id", "tenant_memberships", ["tenant_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_tenant_memberships_tenant_id", table_name="tenant_memberships")
    op.drop_table("tenant_memberships")
    op.drop_index("ix_tenants_identity_provider_org_id", table_name="tenants")
    op.drop_index("ix_tenants_alias", table_name="tenants")
    op.drop_table("tenants")
    op.drop_index("ix_users_identity_provider_user_id", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
