"""Player ORM — a named participant in one game.

Invariants:
    - Always belongs to a Game (game_id FK, ON DELETE CASCADE)
    - Exactly one Player per Game has is_host = True, set at game creation
    - name is 1-50 chars, color is a #RRGGBB palette entry
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from situation_scale.db.base import Base


class Player(Base):
    __tablename__ = "players"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    game_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("games.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    color: Mapped[str] = mapped_column(String(7), nullable=False)
    is_host: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    game: Mapped["Game"] = relationship("Game", back_populates="players")
