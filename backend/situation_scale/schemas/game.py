"""Game Schemas — Pydantic request bodies and public views for REST and room events.

Invariants:
    - Wire format is camelCase (alias_generator), Python side is snake_case
    - Views are built from ORM rows (from_attributes) and reused verbatim as
      broadcast payloads, so REST and socket clients see identical shapes
    - Request bounds mirror core/game_rules.py; the core re-checks them

Design Decisions:
    - populate_by_name=True: tests and services may pass snake_case
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from situation_scale.core.domain_types import (
    GameStatus, MAX_NAME_LENGTH, MAX_SITUATION_LENGTH, SCALE_MAX, SCALE_MIN,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )

    def to_payload(self) -> dict:
        """JSON-safe dict with wire (camelCase) keys."""
        return self.model_dump(mode="json", by_alias=True)


# --- Views --------------------------------------------------------------------

class GameView(CamelModel):
    id: UUID
    room_code: str
    status: GameStatus
    theme: str | None = None
    current_round_id: UUID | None = None
    created_at: datetime


class PlayerView(CamelModel):
    id: UUID
    game_id: UUID
    name: str
    color: str
    is_host: bool


class PromptView(CamelModel):
    id: UUID
    game_id: UUID
    text: str
    used: bool


class RoundView(CamelModel):
    id: UUID
    game_id: UUID
    prompt_id: UUID
    round_number: int
    is_free_round: bool
    completed: bool


class SituationView(CamelModel):
    """A situation joined with its author's public fields."""
    id: UUID
    round_id: UUID
    player_id: UUID
    content: str
    number: int
    position: float
    player: PlayerView


# --- Requests -----------------------------------------------------------------

class CreateGameRequest(CamelModel):
    host_name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)


class JoinGameRequest(CamelModel):
    player_name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)


class SetupRequest(CamelModel):
    theme: str | None = Field(None, max_length=50)
    custom_prompts: list[str] | None = Field(None, max_length=100)


class SubmitSituationRequest(CamelModel):
    player_id: UUID
    content: str = Field(min_length=1, max_length=MAX_SITUATION_LENGTH)
    position: float = Field(ge=SCALE_MIN, le=SCALE_MAX)


class UpdatePositionRequest(CamelModel):
    room_code: str = Field(min_length=1, max_length=6)
    position: float = Field(ge=SCALE_MIN, le=SCALE_MAX)
    player_id: UUID | None = None


# --- Responses ----------------------------------------------------------------

class CreateGameResponse(CamelModel):
    game: GameView
    host: PlayerView


class JoinGameResponse(CamelModel):
    game: GameView
    player: PlayerView


class SnapshotResponse(CamelModel):
    game: GameView
    players: list[PlayerView]
    prompts: list[PromptView]
    rounds: list[RoundView]
    current_round: RoundView | None = None
    situations: list[SituationView]


class SetupResponse(CamelModel):
    success: bool = True
    theme: str | None = None
    prompt_texts: list[str]


class RoundStartedResponse(CamelModel):
    round: RoundView
    prompt: PromptView


class SubmitSituationResponse(CamelModel):
    situation: SituationView


class SuccessResponse(CamelModel):
    success: bool = True


class ResultsResponse(CamelModel):
    player_order: list[SituationView]
    actual_order: list[SituationView]
    accuracy: int
    matches: int
    total: int


class AdvanceRoundResponse(CamelModel):
    completed: bool
    round: RoundView | None = None
    prompt: PromptView | None = None


class ThemesResponse(CamelModel):
    themes: list[str]
