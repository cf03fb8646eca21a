"""Game ORM — persists the aggregate root of one party-game room.

Invariants:
    - id is UUID primary key
    - room_code is unique, 6 uppercase alphanumerics
    - status is one of GameStatus; starts at LOBBY
    - current_round_id is set iff status in {IN_PROGRESS, FREE_ROUND, SHOW_RESULTS}

Design Decisions:
    - current_round_id is a plain indexed column, not a FK: games -> rounds -> games
      would be a circular FK and both rows are always written in one commit
    - cascade delete for players, prompts, rounds
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from situation_scale.db.base import Base


class Game(Base):
    """Game aggregate root — owns players, prompts and rounds."""
    __tablename__ = "games"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    room_code: Mapped[str] = mapped_column(
        String(6), nullable=False, unique=True, index=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="LOBBY",
    )
    theme: Mapped[str | None] = mapped_column(String(50), nullable=True)
    current_round_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    players: Mapped[list["Player"]] = relationship(
        "Player", back_populates="game",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    prompts: Mapped[list["Prompt"]] = relationship(
        "Prompt", back_populates="game",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    rounds: Mapped[list["Round"]] = relationship(
        "Round", back_populates="game",
        cascade="all, delete-orphan", passive_deletes=True,
    )
