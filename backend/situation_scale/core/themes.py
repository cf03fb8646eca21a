"""Prompt Themes — built-in prompt decks and resolution of a setup request.

Invariants:
    - THEME_PROMPTS keys are the only valid theme labels
    - A known theme wins over a custom list when both are supplied
    - Custom lists are stripped, blank entries dropped, and need at least
      `min_custom` survivors
"""

from situation_scale.core.errors import ValidationError


THEME_PROMPTS: dict[str, tuple[str, ...]] = {
    "life-events": (
        "Getting your first job",
        "Moving to a new city",
        "Getting married",
        "Having your first child",
        "Retiring from work",
    ),
    "historical-events": (
        "The invention of the wheel",
        "The fall of the Roman Empire",
        "The discovery of America",
        "World War II",
        "The moon landing",
    ),
    "daily-activities": (
        "Waking up in the morning",
        "Eating breakfast",
        "Commuting to work",
        "Having lunch",
        "Going to bed",
    ),
}


def list_themes() -> list[str]:
    return sorted(THEME_PROMPTS)


def resolve_prompt_texts(
    theme: str | None, custom_prompts: list[str] | None, min_custom: int = 3,
) -> tuple[str | None, list[str]]:
    """Return (theme label to record, prompt texts to persist)."""
    if theme and theme in THEME_PROMPTS:
        return theme, list(THEME_PROMPTS[theme])

    if custom_prompts is not None:
        texts = [t.strip() for t in custom_prompts if t and t.strip()]
        if len(texts) < min_custom:
            raise ValidationError(
                f"Provide at least {min_custom} custom prompts", "customPrompts",
            )
        return None, texts

    if theme:
        raise ValidationError(f"Unknown theme '{theme}'", "theme")
    raise ValidationError("Choose a theme or provide custom prompts", "theme")
