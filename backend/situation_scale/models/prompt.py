"""Prompt ORM — one scale prompt a round can be built from.

Invariants:
    - Always belongs to a Game (game_id FK, ON DELETE CASCADE)
    - used flips False -> True exactly once, when a Round is created from it
    - ordinal is the insertion order within the game; "next prompt" = lowest unused ordinal
"""

import uuid

from sqlalchemy import Text, Boolean, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from situation_scale.db.base import Base


class Prompt(Base):
    __tablename__ = "prompts"
    __table_args__ = (
        UniqueConstraint("game_id", "ordinal", name="uq_prompts_game_ordinal"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    game_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("games.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    used: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    ordinal: Mapped[int] = mapped_column(Integer, nullable=False)

    game: Mapped["Game"] = relationship("Game", back_populates="prompts")
