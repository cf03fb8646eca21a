"""Situation ORM — a player's text, its hidden number and its current position.

Invariants:
    - Always belongs to a Round (round_id FK, ON DELETE CASCADE) and a Player
    - (player_id, round_id) unique: one situation per player per round
    - number in [0, 100] is fixed at creation; position in [0, 100] is mutable
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Integer, Float, DateTime, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from situation_scale.db.base import Base


class Situation(Base):
    __tablename__ = "situations"
    __table_args__ = (
        UniqueConstraint(
            "player_id", "round_id", name="uq_situations_player_round",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    round_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("rounds.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    player_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("players.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(String(200), nullable=False)
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    position: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    round: Mapped["Round"] = relationship("Round", back_populates="situations")
    player: Mapped["Player"] = relationship("Player", lazy="joined")
