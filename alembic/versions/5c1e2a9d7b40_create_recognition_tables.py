"""Create recognitions and user_settings tables

Revision ID: 5c1e2a9d7b40
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "5c1e2a9d7b40"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create the recognition ledger and per-user settings."""
    op.create_table(
        "recognitions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("giver_id", sa.String(64), nullable=False),
        sa.Column("receiver_id", sa.String(64), nullable=False),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("channel_id", sa.String(64), nullable=False),
        sa.Column("tags", sa.JSON, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_recognitions_giver_time", "recognitions", ["giver_id", "created_at"])
    op.create_index("ix_recognitions_receiver", "recognitions", ["receiver_id"])

    op.create_table(
        "user_settings",
        sa.Column("user_id", sa.String(64), primary_key=True),
        sa.Column("timezone", sa.String(64), nullable=False, server_default="UTC"),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("user_settings")
    op.drop_index("ix_recognitions_receiver", table_name="recognitions")
    op.drop_index("ix_recognitions_giver_time", table_name="recognitions")
    op.drop_table("recognitions")
