"""Player Colors — fixed palette with per-game collision avoidance."""

import random
from typing import Iterable


HOST_COLOR = "#6366F1"

PLAYER_PALETTE: tuple[str, ...] = (
    "#EF4444", "#10B981", "#F59E0B", "#8B5CF6", "#EC4899", "#06B6D4",
)


def pick_player_color(
    used_colors: Iterable[str], rng: random.Random | None = None,
) -> str:
    """First palette color not in use, else a uniformly random palette color."""
    used = set(used_colors)
    for color in PLAYER_PALETTE:
        if color not in used:
            return color
    return (rng or random).choice(PLAYER_PALETTE)
