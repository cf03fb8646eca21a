"""Game Projection — client-side read model rebuilt from snapshots and room events.

Invariants:
    - apply_event is PURE: returns a new GameProjection, never mutates its input
    - Unknown events (including cosmetic `*:update` passthroughs) leave state unchanged
    - Re-delivered player:joined / situation:created events are idempotent (dedup by id)
    - A new round clears the previous round's situations and results

Design Decisions:
    - Frozen dataclass + dataclasses.replace: same reducer shape the web clients use,
      testable without any UI or transport
    - Entities kept as the JSON dicts the server sends (camelCase keys)
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable

from situation_scale.core.domain_types import GameStatus, RoomEvent


@dataclass(frozen=True)
class GameProjection:
    """Local cache of one room's authoritative state."""
    room_code: str | None = None
    game_id: str | None = None
    player_id: str | None = None
    is_host: bool = False
    status: GameStatus = GameStatus.LOBBY
    theme: str | None = None
    players: tuple[dict, ...] = ()
    prompts: tuple[dict, ...] = ()
    current_round: dict | None = None
    current_prompt: dict | None = None
    situations: tuple[dict, ...] = ()
    results: dict | None = None
    extras: dict = field(default_factory=dict)


def from_snapshot(
    snapshot: dict, player_id: str | None = None,
) -> GameProjection:
    """Build a projection from the GET /games/{roomCode} response body."""
    game = snapshot["game"]
    players = tuple(snapshot.get("players") or ())
    prompts = tuple(snapshot.get("prompts") or ())
    current_round = snapshot.get("currentRound")
    current_prompt = None
    if current_round:
        current_prompt = next(
            (p for p in prompts if p["id"] == current_round.get("promptId")),
            None,
        )
    me = next((p for p in players if p["id"] == player_id), None)
    return GameProjection(
        room_code=game["roomCode"],
        game_id=game["id"],
        player_id=player_id,
        is_host=bool(me and me.get("isHost")),
        status=GameStatus(game["status"]),
        theme=game.get("theme"),
        players=players,
        prompts=prompts,
        current_round=current_round,
        current_prompt=current_prompt,
        situations=tuple(snapshot.get("situations") or ()),
    )


# ─── Event handlers ─────────────────────────────────────────────

def _player_joined(state: GameProjection, data: dict) -> GameProjection:
    player = data["player"]
    if any(p["id"] == player["id"] for p in state.players):
        return state
    return replace(state, players=state.players + (player,))


def _setup_updated(state: GameProjection, data: dict) -> GameProjection:
    return replace(state, theme=data.get("theme") or state.theme)


def _round_started(state: GameProjection, data: dict) -> GameProjection:
    prompt = data["prompt"]
    prompts = tuple(
        {**p, "used": True} if p["id"] == prompt["id"] else p
        for p in state.prompts
    )
    return replace(
        state,
        status=GameStatus.IN_PROGRESS,
        current_round=data["round"],
        current_prompt={**prompt, "used": True},
        prompts=prompts,
        situations=(),
        results=None,
    )


def _situation_created(state: GameProjection, data: dict) -> GameProjection:
    situation = data["situation"]
    if any(s["id"] == situation["id"] for s in state.situations):
        return state
    return replace(state, situations=state.situations + (situation,))


def _situation_moved(state: GameProjection, data: dict) -> GameProjection:
    situation_id = data["situationId"]
    position = data["position"]
    return replace(
        state,
        situations=tuple(
            {**s, "position": position} if s["id"] == situation_id else s
            for s in state.situations
        ),
    )


def _free_round_started(state: GameProjection, data: dict) -> GameProjection:
    return replace(state, status=GameStatus.FREE_ROUND)


def _results_ready(state: GameProjection, data: dict) -> GameProjection:
    current_round = state.current_round
    if current_round is not None:
        current_round = {**current_round, "completed": True}
    return replace(
        state,
        status=GameStatus.SHOW_RESULTS,
        current_round=current_round,
        results=data,
    )


def _game_completed(state: GameProjection, data: dict) -> GameProjection:
    return replace(
        state,
        status=GameStatus.COMPLETED,
        current_round=None,
        current_prompt=None,
    )


_HANDLERS: dict[str, Callable[[GameProjection, dict], GameProjection]] = {
    RoomEvent.PLAYER_JOINED.value: _player_joined,
    RoomEvent.SETUP_UPDATED.value: _setup_updated,
    RoomEvent.GAME_STARTED.value: _round_started,
    RoomEvent.NEXT_ROUND_STARTED.value: _round_started,
    RoomEvent.SITUATION_CREATED.value: _situation_created,
    RoomEvent.SITUATION_MOVED.value: _situation_moved,
    RoomEvent.FREE_ROUND_STARTED.value: _free_round_started,
    RoomEvent.RESULTS_READY.value: _results_ready,
    RoomEvent.GAME_COMPLETED.value: _game_completed,
}


def apply_event(
    state: GameProjection, event: str, data: Any,
) -> GameProjection:
    """Return the projection after `event`. Unknown events are ignored."""
    handler = _HANDLERS.get(event)
    if handler is None:
        return state
    return handler(state, data if isinstance(data, dict) else {})
