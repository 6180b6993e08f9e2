"""Create tenants, users and notes tables

Revision ID: 4f1c2b7a9d10
Revises:
Create Date: 2025-09-20 10:12:31.418207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from tenantnotes.core.models.types import GUID, StringListType

# revision identifiers, used by Alembic.
revision: str = "4f1c2b7a9d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _tier_column() -> sa.Column:
    return sa.Column(
        "subscription",
        sa.Enum("free", "pro", name="subscription_tier", native_enum=False, length=20),
        nullable=False,
    )


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "tenants",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        _tier_column(),
        *_timestamps(),
        sa.CheckConstraint("length(name) <= 100", name="ck_tenants_name_len"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "users",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("tenant_id", GUID(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column(
            "role",
            sa.Enum("admin", "member", name="user_role", native_enum=False, length=20),
            nullable=False,
        ),
        _tier_column(),
        *_timestamps(),
        sa.CheckConstraint("length(email) <= 255", name="ck_users_email_len"),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_users_tenant_id", "users", ["tenant_id"])
    op.create_index("idx_users_tenant_role", "users", ["tenant_id", "role"])

    op.create_table(
        "notes",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("tenant_id", GUID(), nullable=False),
        sa.Column("user_id", GUID(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("tags", StringListType(50), nullable=False),
        sa.Column("is_private", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("length(title) <= 200", name="ck_notes_title_len"),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notes_tenant_id", "notes", ["tenant_id"])
    op.create_index("idx_notes_tenant_user", "notes", ["tenant_id", "user_id"])
    op.create_index("idx_notes_tenant_updated", "notes", ["tenant_id", "updated_at"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_notes_tenant_updated", table_name="notes")
    op.drop_index("idx_notes_tenant_user", table_name="notes")
    op.drop_index("ix_notes_tenant_id", table_name="notes")
    op.drop_table("notes")
    op.drop_index("idx_users_tenant_role", table_name="users")
    op.drop_index("ix_users_tenant_id", table_name="users")
    op.drop_table("users")
    op.drop_table("tenants")
