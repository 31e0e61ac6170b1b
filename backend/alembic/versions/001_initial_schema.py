"""Initial schema — daily_keys, game_baseline, result_counts, result_dedup.

Revision ID: 001_initial
Revises: None
Create Date: 2025-09-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "daily_keys",
        sa.Column("date_iso", sa.String(10), primary_key=True),
        sa.Column("slot", sa.String(16), primary_key=True),
        sa.Column("path_keys", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "game_baseline",
        sa.Column("name", sa.String(64), primary_key=True),
        sa.Column("value", sa.String(10), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "result_counts",
        sa.Column("date_iso", sa.String(10), primary_key=True),
        sa.Column("level_index", sa.Integer, primary_key=True),
        sa.Column("attempts", sa.Integer, nullable=False, server_default="0"),
        sa.Column("correct", sa.Integer, nullable=False, server_default="0"),
    )

    op.create_table(
        "result_dedup",
        sa.Column("date_iso", sa.String(10), primary_key=True),
        sa.Column("level_index", sa.Integer, primary_key=True),
        sa.Column("player_session", sa.String(64), primary_key=True),
    )


def downgrade() -> None:
    op.drop_table("result_dedup")
    op.drop_table("result_counts")
    op.drop_table("game_baseline")
    op.drop_table("daily_keys")
