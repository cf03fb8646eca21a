"""Round ORM — one prompt played by the room.

Invariants:
    - Always belongs to a Game (game_id FK, ON DELETE CASCADE)
    - round_number starts at 1 and increments; (game_id, round_number) unique
    - completed set True when results are computed
    - is_free_round is never set by the current flow; free-round-ness lives on Game.status

Design Decisions:
    - round_number as Integer (not auto-increment): assigned from the game's round count
    - cascade delete for situations: round owns all its situations
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Integer, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from situation_scale.db.base import Base


class Round(Base):
    """Round entity — one prompt, one situation per player."""
    __tablename__ = "rounds"
    __table_args__ = (
        UniqueConstraint(
            "game_id", "round_number", name="uq_rounds_game_round_number",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    game_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("games.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    prompt_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("prompts.id"), nullable=False,
    )
    round_number: Mapped[int] = mapped_column(Integer, nullable=False)
    is_free_round: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    game: Mapped["Game"] = relationship("Game", back_populates="rounds")
    situations: Mapped[list["Situation"]] = relationship(
        "Situation", back_populates="round",
        cascade="all, delete-orphan", passive_deletes=True,
    )
