"""Prompt Themes — built-in decks and setup resolution."""

import pytest

from situation_scale.core.errors import ValidationError
from situation_scale.core.themes import THEME_PROMPTS, list_themes, resolve_prompt_texts


def test_list_themes_sorted():
    assert list_themes() == ["daily-activities", "historical-events", "life-events"]


def test_every_theme_has_five_prompts():
    assert all(len(prompts) == 5 for prompts in THEME_PROMPTS.values())


def test_known_theme_returns_its_deck():
    label, texts = resolve_prompt_texts("life-events", None)
    assert label == "life-events"
    assert texts[0] == "Getting your first job"
    assert len(texts) == 5


def test_known_theme_wins_over_custom_list():
    label, texts = resolve_prompt_texts("daily-activities", ["a", "b", "c"])
    assert label == "daily-activities"
    assert "a" not in texts


def test_custom_prompts_stripped_and_blanks_dropped():
    label, texts = resolve_prompt_texts(None, [" one ", "", "two", "   ", "three"])
    assert label is None
    assert texts == ["one", "two", "three"]


def test_custom_prompts_need_minimum():
    with pytest.raises(ValidationError) as exc_info:
        resolve_prompt_texts(None, ["one", "two", " "])
    assert exc_info.value.field == "customPrompts"


def test_custom_minimum_is_configurable():
    _, texts = resolve_prompt_texts(None, ["only"], min_custom=1)
    assert texts == ["only"]


def test_unknown_theme_without_custom_list():
    with pytest.raises(ValidationError) as exc_info:
        resolve_prompt_texts("space-travel", None)
    assert exc_info.value.field == "theme"


def test_unknown_theme_falls_back_to_custom_list():
    label, texts = resolve_prompt_texts("space-travel", ["a", "b", "c"])
    assert label is None
    assert texts == ["a", "b", "c"]


def test_nothing_supplied():
    with pytest.raises(ValidationError):
        resolve_prompt_texts(None, None)
