"""Game Schemas — camelCase wire format and request bounds.

Invariants:
    - Requests accept camelCase (wire) and snake_case (Python callers)
    - to_payload() emits camelCase, JSON-safe values
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from situation_scale.core.domain_types import GameStatus
from situation_scale.schemas.game import (
    CreateGameRequest,
    GameView,
    SetupRequest,
    SubmitSituationRequest,
    UpdatePositionRequest,
)


def test_requests_accept_both_spellings():
    assert CreateGameRequest(hostName="Ana").host_name == "Ana"
    assert CreateGameRequest(host_name="Ana").host_name == "Ana"


def test_setup_request_all_optional():
    body = SetupRequest()
    assert body.theme is None
    assert body.custom_prompts is None


def test_submit_request_bounds():
    pid = uuid4()
    SubmitSituationRequest(playerId=pid, content="x", position=100)
    with pytest.raises(ValidationError):
        SubmitSituationRequest(playerId=pid, content="x", position=-1)
    with pytest.raises(ValidationError):
        SubmitSituationRequest(playerId=pid, content="x" * 201, position=1)


def test_update_position_player_optional():
    body = UpdatePositionRequest(roomCode="ABC123", position=5)
    assert body.player_id is None


def test_view_payload_is_camel_case_json():
    gid = uuid4()
    view = GameView(
        id=gid, room_code="ABC123", status=GameStatus.LOBBY,
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )
    payload = view.to_payload()
    assert payload["roomCode"] == "ABC123"
    assert payload["id"] == str(gid)
    assert payload["status"] == "LOBBY"
    assert payload["currentRoundId"] is None
