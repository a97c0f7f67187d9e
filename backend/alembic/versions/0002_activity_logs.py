"""add activity_logs table

Revision ID: 0002_activity_logs
Revises: 0001_admin_users
Create Date: 2026-10-19

"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0002_activity_logs"
down_revision = "0001_admin_users"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "activity_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("admin_users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("user_name", sa.String(120), nullable=False),
        sa.Column("restaurant_name", sa.String(200), nullable=True),
        sa.Column("module", sa.String(64), nullable=False),
        sa.Column("sub_module", sa.String(64), nullable=False),
        sa.Column("action", sa.String(16), nullable=False),
        sa.Column("target_name", sa.String(200), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_activity_logs_user_id", "activity_logs", ["user_id"])
    op.create_index("ix_activity_logs_module", "activity_logs", ["module"])
    op.create_index("ix_activity_logs_sub_module", "activity_logs", ["sub_module"])
    op.create_index("ix_activity_logs_action", "activity_logs", ["action"])
    op.create_index("ix_activity_logs_timestamp_id", "activity_logs", ["timestamp", "id"])


def downgrade() -> None:
    op.drop_table("activity_logs")
