"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - GameId, PlayerId, PromptId, RoundId, SituationId wrap UUIDs
    - Positions and hidden numbers live on the closed scale [SCALE_MIN, SCALE_MAX]
    - All valid game phases encoded as GameStatus — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

GameId = NewType("GameId", UUID)
PlayerId = NewType("PlayerId", UUID)
PromptId = NewType("PromptId", UUID)
RoundId = NewType("RoundId", UUID)
SituationId = NewType("SituationId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

RoomCode = NewType("RoomCode", str)        # 6 uppercase alphanumerics
Position = NewType("Position", float)      # 0.0–100.0, player belief
HiddenNumber = NewType("HiddenNumber", int)  # 0–100, ground truth

SCALE_MIN = 0
SCALE_MAX = 100

MAX_NAME_LENGTH = 50
MAX_SITUATION_LENGTH = 200


# ─── Enums ───────────────────────────────────────────────────────

class GameStatus(str, Enum):
    """Game lifecycle states — maps to DB `status` column."""
    LOBBY = "LOBBY"
    IN_PROGRESS = "IN_PROGRESS"
    FREE_ROUND = "FREE_ROUND"
    SHOW_RESULTS = "SHOW_RESULTS"
    COMPLETED = "COMPLETED"


class GameCommand(str, Enum):
    """Commands whose legality depends on the current GameStatus."""
    JOIN = "join_game"
    CONFIGURE = "configure_setup"
    START = "start_game"
    SUBMIT = "submit_situation"
    FREE_ROUND = "start_free_round"
    RESULTS = "compute_results"
    ADVANCE = "advance_round"


class RoomEvent(str, Enum):
    """Server-to-client broadcast event names."""
    PLAYER_JOINED = "player:joined"
    SETUP_UPDATED = "game:setup_updated"
    GAME_STARTED = "game:started"
    SITUATION_CREATED = "situation:created"
    SITUATION_MOVED = "situation:moved"
    FREE_ROUND_STARTED = "free_round:started"
    RESULTS_READY = "results:ready"
    NEXT_ROUND_STARTED = "next_round:started"
    GAME_COMPLETED = "game:completed"
