"""Domain Types — verifies rich type definitions and enum values.

Tests:
    - NewType wrappers exist and are callable
    - GameStatus has exactly the five phases, values equal to names
    - Room event names match the wire names web clients subscribe to
"""

import json
from uuid import uuid4

from situation_scale.core.domain_types import (
    GameId, PlayerId, RoundId, SituationId,
    Position, HiddenNumber,
    GameStatus, GameCommand, RoomEvent,
    SCALE_MIN, SCALE_MAX,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert GameId(uid) == uid
    assert PlayerId(uid) == uid
    assert RoundId(uid) == uid
    assert SituationId(uid) == uid


def test_value_types_wrap_primitives():
    assert Position(42.5) == 42.5
    assert HiddenNumber(7) == 7


def test_scale_bounds():
    assert (SCALE_MIN, SCALE_MAX) == (0, 100)


def test_game_status_has_five_phases():
    assert [s.value for s in GameStatus] == [
        "LOBBY", "IN_PROGRESS", "FREE_ROUND", "SHOW_RESULTS", "COMPLETED",
    ]


def test_game_status_serializes_as_plain_string():
    assert json.dumps({"status": GameStatus.FREE_ROUND}) == '{"status": "FREE_ROUND"}'


def test_room_event_wire_names():
    assert RoomEvent.PLAYER_JOINED.value == "player:joined"
    assert RoomEvent.SETUP_UPDATED.value == "game:setup_updated"
    assert RoomEvent.RESULTS_READY.value == "results:ready"
    assert RoomEvent.NEXT_ROUND_STARTED.value == "next_round:started"
    assert len(RoomEvent) == 9


def test_every_command_is_distinct():
    assert len({c.value for c in GameCommand}) == len(GameCommand)
