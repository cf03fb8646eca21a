"""Initial schema — games, players, prompts, rounds, situations.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "games",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("room_code", sa.String(6), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="LOBBY"),
        sa.Column("theme", sa.String(50), nullable=True),
        sa.Column("current_round_id", UUID(as_uuid=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_games_room_code", "games", ["room_code"], unique=True)
    op.create_index("ix_games_current_round_id", "games", ["current_round_id"])

    op.create_table(
        "players",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("game_id", UUID(as_uuid=True), sa.ForeignKey("games.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("color", sa.String(7), nullable=False),
        sa.Column("is_host", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_players_game_id", "players", ["game_id"])

    op.create_table(
        "prompts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("game_id", UUID(as_uuid=True), sa.ForeignKey("games.id", ondelete="CASCADE"), nullable=False),
        sa.Column("text", sa.Text, nullable=False),
        sa.Column("used", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("ordinal", sa.Integer, nullable=False),
        sa.UniqueConstraint("game_id", "ordinal", name="uq_prompts_game_ordinal"),
    )
    op.create_index("ix_prompts_game_id", "prompts", ["game_id"])

    op.create_table(
        "rounds",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("game_id", UUID(as_uuid=True), sa.ForeignKey("games.id", ondelete="CASCADE"), nullable=False),
        sa.Column("prompt_id", UUID(as_uuid=True), sa.ForeignKey("prompts.id"), nullable=False),
        sa.Column("round_number", sa.Integer, nullable=False),
        sa.Column("is_free_round", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("completed", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("game_id", "round_number", name="uq_rounds_game_round_number"),
    )
    op.create_index("ix_rounds_game_id", "rounds", ["game_id"])

    op.create_table(
        "situations",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("round_id", UUID(as_uuid=True), sa.ForeignKey("rounds.id", ondelete="CASCADE"), nullable=False),
        sa.Column("player_id", UUID(as_uuid=True), sa.ForeignKey("players.id", ondelete="CASCADE"), nullable=False),
        sa.Column("content", sa.String(200), nullable=False),
        sa.Column("number", sa.Integer, nullable=False),
        sa.Column("position", sa.Float, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("player_id", "round_id", name="uq_situations_player_round"),
    )
    op.create_index("ix_situations_round_id", "situations", ["round_id"])


def downgrade() -> None:
    op.drop_table("situations")
    op.drop_table("rounds")
    op.drop_table("prompts")
    op.drop_table("players")
    op.drop_table("games")
