"""Boundary Protocols — contracts between the game core, the entity store and the room channel.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through the GameStore Protocol
    - Store methods stage writes; nothing is durable until commit()

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Record protocols (GameLike, PlayerLike, ...) describe the attributes the
      orchestrator reads, so the ORM models satisfy them without importing core
"""

from datetime import datetime
from typing import Protocol, Sequence
from uuid import UUID


class GameLike(Protocol):
    id: UUID
    room_code: str
    status: str
    theme: str | None
    current_round_id: UUID | None
    created_at: datetime


class PlayerLike(Protocol):
    id: UUID
    game_id: UUID
    name: str
    color: str
    is_host: bool


class PromptLike(Protocol):
    id: UUID
    game_id: UUID
    text: str
    used: bool
    ordinal: int


class RoundLike(Protocol):
    id: UUID
    game_id: UUID
    prompt_id: UUID
    round_number: int
    is_free_round: bool
    completed: bool


class SituationLike(Protocol):
    id: UUID
    round_id: UUID
    player_id: UUID
    content: str
    number: int
    position: float
    player: PlayerLike


class GameStore(Protocol):
    """Contract for game persistence — implemented by shell."""

    # Game
    async def create_game(self, room_code: str, status: str) -> GameLike: ...
    async def get_game(self, game_id: UUID) -> GameLike | None: ...
    async def get_game_by_room_code(self, room_code: str) -> GameLike | None: ...
    async def room_code_exists(self, room_code: str) -> bool: ...
    async def set_game_status(self, game: GameLike, status: str) -> None: ...
    async def set_current_round(
        self, game: GameLike, round_id: UUID | None,
    ) -> None: ...
    async def set_theme(self, game: GameLike, theme: str | None) -> None: ...

    # Player
    async def create_player(
        self, game_id: UUID, name: str, color: str, is_host: bool,
    ) -> PlayerLike: ...
    async def get_player(self, player_id: UUID) -> PlayerLike | None: ...
    async def list_players(self, game_id: UUID) -> Sequence[PlayerLike]: ...

    # Prompt
    async def create_prompt(self, game_id: UUID, text: str) -> PromptLike: ...
    async def create_prompts(
        self, game_id: UUID, texts: Sequence[str],
    ) -> Sequence[PromptLike]: ...
    async def list_prompts(self, game_id: UUID) -> Sequence[PromptLike]: ...
    async def list_unused_prompts(self, game_id: UUID) -> Sequence[PromptLike]: ...
    async def mark_prompt_used(self, prompt: PromptLike) -> None: ...

    # Round
    async def create_round(
        self, game_id: UUID, prompt_id: UUID, round_number: int,
    ) -> RoundLike: ...
    async def get_round(self, round_id: UUID) -> RoundLike | None: ...
    async def list_rounds(self, game_id: UUID) -> Sequence[RoundLike]: ...
    async def count_rounds(self, game_id: UUID) -> int: ...
    async def mark_round_completed(self, round_: RoundLike) -> None: ...

    # Situation
    async def create_situation(
        self, round_id: UUID, player_id: UUID, content: str,
        number: int, position: float,
    ) -> SituationLike: ...
    async def get_situation(self, situation_id: UUID) -> SituationLike | None: ...
    async def find_situation(
        self, round_id: UUID, player_id: UUID,
    ) -> SituationLike | None: ...
    async def list_situations_with_players(
        self, round_id: UUID,
    ) -> Sequence[SituationLike]: ...
    async def update_situation_position(
        self, situation: SituationLike, position: float,
    ) -> None: ...

    # Unit of work
    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...


class RoomPublisher(Protocol):
    """Contract for room fan-out — implemented by infrastructure/room_broadcast.py."""
    def publish(self, room_code: str, event: str, payload: object) -> int: ...
