"""Game Rules — phase-transition table and input validation for every command.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Raise a GameError subclass on violation, return the normalized value on success
    - TRANSITIONS is the single source of truth for which status allows which command
    - LOBBY is the only initial status, COMPLETED the only terminal one
    - ADVANCE is allowed before RESULTS, so a skipped round is never scored and
      keeps completed=False

Design Decisions:
    - Raising (not returning error dicts): the only consumer is the REST surface,
      which maps GameError to a JSON response in one handler
"""

from uuid import UUID

from situation_scale.core.domain_types import (
    GameCommand,
    GameStatus,
    MAX_NAME_LENGTH,
    MAX_SITUATION_LENGTH,
    SCALE_MAX,
    SCALE_MIN,
)
from situation_scale.core.errors import (
    CapacityError,
    ErrorContext,
    InsufficientPlayersError,
    InvalidStateError,
    NoPromptsError,
    PermissionDeniedError,
    ValidationError,
)


_IN_PLAY = frozenset({
    GameStatus.IN_PROGRESS, GameStatus.FREE_ROUND, GameStatus.SHOW_RESULTS,
})

TRANSITIONS: dict[GameCommand, frozenset[GameStatus]] = {
    GameCommand.JOIN: frozenset({GameStatus.LOBBY}),
    GameCommand.CONFIGURE: frozenset(set(GameStatus) - {GameStatus.COMPLETED}),
    GameCommand.START: frozenset({GameStatus.LOBBY}),
    GameCommand.SUBMIT: frozenset({GameStatus.IN_PROGRESS, GameStatus.FREE_ROUND}),
    GameCommand.FREE_ROUND: frozenset({GameStatus.IN_PROGRESS, GameStatus.FREE_ROUND}),
    GameCommand.RESULTS: _IN_PLAY,
    # skipping RESULTS leaves the outgoing round unscored
    GameCommand.ADVANCE: _IN_PLAY,
}


def statuses_with_current_round() -> frozenset[GameStatus]:
    """Statuses in which Game.current_round_id must be set."""
    return _IN_PLAY


def check_command_allowed(
    command: GameCommand, status: GameStatus | str,
    context: ErrorContext | None = None,
) -> None:
    """Raise InvalidStateError when `command` is illegal in `status`."""
    status = GameStatus(status)
    if status not in TRANSITIONS[command]:
        raise InvalidStateError(command.value, status.value, context)


# ─── Input validation ───────────────────────────────────────────

def validate_player_name(name: str | None, field: str = "name") -> str:
    """Names are stripped and must be 1–50 characters."""
    name = (name or "").strip()
    if not name:
        raise ValidationError("Name cannot be empty", field)
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(
            f"Name cannot exceed {MAX_NAME_LENGTH} characters", field,
        )
    return name


def validate_situation_content(content: str | None) -> str:
    content = (content or "").strip()
    if not content:
        raise ValidationError("Situation cannot be empty", "content")
    if len(content) > MAX_SITUATION_LENGTH:
        raise ValidationError(
            f"Situation cannot exceed {MAX_SITUATION_LENGTH} characters",
            "content",
        )
    return content


def validate_position(position: float | None) -> float:
    """Positions must be finite numbers on the [0, 100] scale."""
    if position is None or isinstance(position, bool):
        raise ValidationError("Position is required", "position")
    try:
        value = float(position)
    except (TypeError, ValueError):
        raise ValidationError("Position must be a number", "position")
    if not SCALE_MIN <= value <= SCALE_MAX:  # NaN fails both comparisons
        raise ValidationError(
            f"Position must be between {SCALE_MIN} and {SCALE_MAX}", "position",
        )
    return value


# ─── Preconditions ──────────────────────────────────────────────

def check_can_join(
    status: GameStatus | str, player_count: int, max_players: int,
    context: ErrorContext | None = None,
) -> None:
    """Join window is LOBBY only, and closes at `max_players`."""
    check_command_allowed(GameCommand.JOIN, status, context)
    if player_count >= max_players:
        raise CapacityError(max_players, context)


def check_can_start(
    status: GameStatus | str, player_count: int, unused_prompts: int,
    min_players: int, context: ErrorContext | None = None,
) -> None:
    check_command_allowed(GameCommand.START, status, context)
    if player_count < min_players:
        raise InsufficientPlayersError(min_players, player_count, context)
    if unused_prompts == 0:
        raise NoPromptsError(context)


def check_can_move(
    owner_id: UUID, caller_id: UUID | None, status: GameStatus | str,
) -> None:
    """Only the author moves a situation, except during FREE_ROUND.

    A missing caller_id is the trusted-client path and is always allowed.
    """
    if caller_id is None:
        return
    status = GameStatus(status)
    if status == GameStatus.FREE_ROUND:
        return
    if status != GameStatus.IN_PROGRESS:
        raise PermissionDeniedError(
            f"Situations cannot be moved while game is {status.value}",
        )
    if owner_id != caller_id:
        raise PermissionDeniedError(
            "Only the author can move this situation before the free round",
        )


def next_round_number(existing_rounds: int) -> int:
    """Round numbers run 1..N with no gaps."""
    return existing_rounds + 1
