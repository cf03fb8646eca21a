"""Structured Logging — JSON formatter fields and extras."""

import json
import logging

from situation_scale.infrastructure.observability import JSONFormatter


def _record(msg="hello", **extra):
    record = logging.LogRecord(
        "situation_scale.test", logging.INFO, __file__, 1, msg, None, None,
    )
    record.__dict__.update(extra)
    return record


def test_base_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "INFO"
    assert out["logger"] == "situation_scale.test"
    assert out["message"] == "hello"
    assert "timestamp" in out


def test_game_extras_surface_when_present():
    out = json.loads(JSONFormatter().format(
        _record(room_code="ABC123", round_number=2, event="results:ready"),
    ))
    assert out["room_code"] == "ABC123"
    assert out["round_number"] == 2
    assert out["event"] == "results:ready"
    assert "player_id" not in out
