"""create sub_memberships

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19
"""
import sqlalchemy as sa
from alembic import op

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "sub_memberships",
        sa.Column("sub_name", sa.String(length=100), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column(
            "joined_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("sub_name", "user_id"),
    )
    op.create_index("ix_sub_memberships_user_id", "sub_memberships", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_sub_memberships_user_id", table_name="sub_memberships")
    op.drop_table("sub_memberships")
