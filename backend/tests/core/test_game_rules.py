"""Game Rules — transition table, input validation and command preconditions.

Tests cover:
    - TRANSITIONS: allowed and rejected source statuses per command
    - COMPLETED is terminal for every command
    - Name, content and position validation (strip, bounds, NaN, bool)
    - join / start / move preconditions and the errors they raise
"""

from uuid import uuid4

import pytest

from situation_scale.core.domain_types import GameCommand, GameStatus
from situation_scale.core.errors import (
    CapacityError,
    ErrorContext,
    InsufficientPlayersError,
    InvalidStateError,
    NoPromptsError,
    PermissionDeniedError,
    ValidationError,
)
from situation_scale.core.game_rules import (
    TRANSITIONS,
    check_can_join,
    check_can_move,
    check_can_start,
    check_command_allowed,
    next_round_number,
    statuses_with_current_round,
    validate_player_name,
    validate_position,
    validate_situation_content,
)


# -- Transition table ----------------------------------------------------------

@pytest.mark.parametrize("command,status", [
    (GameCommand.START, GameStatus.LOBBY),
    (GameCommand.FREE_ROUND, GameStatus.IN_PROGRESS),
    (GameCommand.FREE_ROUND, GameStatus.FREE_ROUND),
    (GameCommand.RESULTS, GameStatus.IN_PROGRESS),
    (GameCommand.RESULTS, GameStatus.FREE_ROUND),
    (GameCommand.RESULTS, GameStatus.SHOW_RESULTS),
    (GameCommand.ADVANCE, GameStatus.SHOW_RESULTS),
    (GameCommand.SUBMIT, GameStatus.FREE_ROUND),
    (GameCommand.CONFIGURE, GameStatus.IN_PROGRESS),
])
def test_allowed_transitions(command, status):
    check_command_allowed(command, status)


@pytest.mark.parametrize("command,status", [
    (GameCommand.START, GameStatus.IN_PROGRESS),
    (GameCommand.JOIN, GameStatus.IN_PROGRESS),
    (GameCommand.FREE_ROUND, GameStatus.LOBBY),
    (GameCommand.FREE_ROUND, GameStatus.SHOW_RESULTS),
    (GameCommand.RESULTS, GameStatus.LOBBY),
    (GameCommand.ADVANCE, GameStatus.LOBBY),
    (GameCommand.SUBMIT, GameStatus.SHOW_RESULTS),
])
def test_rejected_transitions(command, status):
    with pytest.raises(InvalidStateError):
        check_command_allowed(command, status)


def test_completed_is_terminal():
    for command in GameCommand:
        assert GameStatus.COMPLETED not in TRANSITIONS[command]


def test_every_command_has_a_row():
    assert set(TRANSITIONS) == set(GameCommand)


def test_status_accepted_as_raw_string():
    check_command_allowed(GameCommand.START, "LOBBY")
    with pytest.raises(InvalidStateError):
        check_command_allowed(GameCommand.START, "COMPLETED")


def test_invalid_state_message_names_command_and_status():
    with pytest.raises(InvalidStateError) as exc_info:
        check_command_allowed(
            GameCommand.JOIN, GameStatus.IN_PROGRESS, ErrorContext(room_code="ABC123"),
        )
    assert exc_info.value.message == "Cannot join game while game is IN_PROGRESS"
    assert exc_info.value.http_status == 409
    assert exc_info.value.context.room_code == "ABC123"


def test_current_round_statuses():
    assert statuses_with_current_round() == {
        GameStatus.IN_PROGRESS, GameStatus.FREE_ROUND, GameStatus.SHOW_RESULTS,
    }


# -- Validation ----------------------------------------------------------------

def test_player_name_is_stripped():
    assert validate_player_name("  Ana  ") == "Ana"


@pytest.mark.parametrize("name", ["", "   ", None])
def test_player_name_empty_rejected(name):
    with pytest.raises(ValidationError) as exc_info:
        validate_player_name(name, "hostName")
    assert exc_info.value.field == "hostName"


def test_player_name_length_limit():
    assert validate_player_name("x" * 50) == "x" * 50
    with pytest.raises(ValidationError):
        validate_player_name("x" * 51)


def test_situation_content_limit():
    assert validate_situation_content(" first kiss ") == "first kiss"
    assert len(validate_situation_content("y" * 200)) == 200
    with pytest.raises(ValidationError):
        validate_situation_content("y" * 201)
    with pytest.raises(ValidationError):
        validate_situation_content("  ")


@pytest.mark.parametrize("position", [0, 0.0, 50.5, 100])
def test_position_in_range(position):
    assert validate_position(position) == float(position)


@pytest.mark.parametrize("position", [-0.1, 100.01, float("nan"), None, True, "abc"])
def test_position_out_of_range(position):
    with pytest.raises(ValidationError) as exc_info:
        validate_position(position)
    assert exc_info.value.field == "position"


# -- Preconditions -------------------------------------------------------------

def test_join_capacity():
    check_can_join(GameStatus.LOBBY, 7, 8)
    with pytest.raises(CapacityError) as exc_info:
        check_can_join(GameStatus.LOBBY, 8, 8)
    assert exc_info.value.code == "GAME_FULL"


def test_join_after_start_is_invalid_state():
    with pytest.raises(InvalidStateError):
        check_can_join(GameStatus.IN_PROGRESS, 2, 8)


def test_start_requires_two_players():
    with pytest.raises(InsufficientPlayersError):
        check_can_start(GameStatus.LOBBY, 1, 5, min_players=2)


def test_start_requires_unused_prompt():
    with pytest.raises(NoPromptsError):
        check_can_start(GameStatus.LOBBY, 2, 0, min_players=2)


def test_start_checks_status_first():
    with pytest.raises(InvalidStateError):
        check_can_start(GameStatus.IN_PROGRESS, 0, 0, min_players=2)


def test_move_without_caller_is_trusted():
    check_can_move(uuid4(), None, GameStatus.SHOW_RESULTS)


def test_owner_moves_during_round():
    owner = uuid4()
    check_can_move(owner, owner, GameStatus.IN_PROGRESS)


def test_non_owner_blocked_until_free_round():
    owner, other = uuid4(), uuid4()
    with pytest.raises(PermissionDeniedError):
        check_can_move(owner, other, GameStatus.IN_PROGRESS)
    check_can_move(owner, other, GameStatus.FREE_ROUND)


def test_nobody_moves_after_results():
    owner = uuid4()
    with pytest.raises(PermissionDeniedError):
        check_can_move(owner, owner, GameStatus.SHOW_RESULTS)


def test_round_numbers_have_no_gaps():
    assert next_round_number(0) == 1
    assert next_round_number(4) == 5
