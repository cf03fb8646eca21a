"""Error hierarchy — HTTP status mapping and the REST response shape."""

import pytest

from situation_scale.core.errors import (
    AlreadySubmittedError,
    CapacityError,
    ErrorContext,
    GameError,
    InsufficientPlayersError,
    InvalidStateError,
    NoPromptsError,
    NotFoundError,
    PermissionDeniedError,
    PersistenceError,
    ValidationError,
)


@pytest.mark.parametrize("error,status", [
    (ValidationError("bad", "name"), 400),
    (NotFoundError("Game", "ABC123"), 404),
    (InvalidStateError("start_game", "COMPLETED"), 409),
    (CapacityError(8), 409),
    (InsufficientPlayersError(2, 1), 409),
    (NoPromptsError(), 409),
    (AlreadySubmittedError(), 409),
    (PermissionDeniedError("nope"), 403),
    (PersistenceError("commit"), 503),
])
def test_http_status(error, status):
    assert isinstance(error, GameError)
    assert error.http_status == status


def test_not_found_message():
    assert NotFoundError("Game", "ZZZ999").message == "Game 'ZZZ999' not found"


def test_persistence_error_hides_operation():
    error = PersistenceError("insert situations")
    body = error.to_response()
    assert "insert" not in body["message"]
    assert error.operation == "insert situations"


def test_response_shape_carries_context():
    error = CapacityError(8, ErrorContext(room_code="ROOM01", round_number=2))
    body = error.to_response()
    assert body["message"] == "Game is full (8 players)"
    assert body["error"]["code"] == "GAME_FULL"
    assert body["error"]["category"] == "business_rule"
    assert body["error"]["context"] == {"room_code": "ROOM01", "round_number": 2}
    assert "timestamp" in body["error"]
