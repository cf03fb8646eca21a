"""Round Scoring — orders situations and measures how close the room came.

Invariants:
    - Pure: no IO, no mutation of the situations passed in
    - Ties broken by str(situation.id) ascending, identically for both orders
    - accuracy = round_half_up(100 * matches / total); total == 0 gives 0
    - accuracy == 100 iff player order and actual order are the same id sequence
    - Hidden numbers are drawn independently of anything the player submits
"""

import random
from dataclasses import dataclass
from typing import Protocol, Sequence, TypeVar
from uuid import UUID

from situation_scale.core.domain_types import SCALE_MAX, SCALE_MIN


class Scorable(Protocol):
    id: UUID
    position: float
    number: int


S = TypeVar("S", bound=Scorable)


@dataclass(frozen=True)
class RoundScore:
    """Outcome of comparing the room's ordering with the true ordering."""
    player_order: list
    actual_order: list
    matches: int
    total: int
    accuracy: int


def draw_hidden_number(rng: random.Random | None = None) -> int:
    """Uniform integer on the closed scale."""
    return (rng or random).randint(SCALE_MIN, SCALE_MAX)


def order_by_position(situations: Sequence[S]) -> list[S]:
    return sorted(situations, key=lambda s: (s.position, str(s.id)))


def order_by_number(situations: Sequence[S]) -> list[S]:
    return sorted(situations, key=lambda s: (s.number, str(s.id)))


def count_positional_matches(
    player_order: Sequence[Scorable], actual_order: Sequence[Scorable],
) -> int:
    """Slots where both orders hold the same situation. Right item, wrong slot scores 0."""
    return sum(
        1 for mine, truth in zip(player_order, actual_order)
        if mine.id == truth.id
    )


def accuracy_percent(matches: int, total: int) -> int:
    if total == 0:
        return 0
    # half-up, not banker's rounding: 2.5 -> 3
    return (200 * matches + total) // (2 * total)


def score_round(situations: Sequence[S]) -> RoundScore:
    player_order = order_by_position(situations)
    actual_order = order_by_number(situations)
    matches = count_positional_matches(player_order, actual_order)
    total = len(situations)
    return RoundScore(
        player_order=player_order,
        actual_order=actual_order,
        matches=matches,
        total=total,
        accuracy=accuracy_percent(matches, total),
    )
