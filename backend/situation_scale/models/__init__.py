"""ORM Models — SQLAlchemy declarative models for all game entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Game is the aggregate root; players, prompts and rounds are scoped by game_id

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from situation_scale.models.game import Game  # noqa: F401
from situation_scale.models.player import Player  # noqa: F401
from situation_scale.models.prompt import Prompt  # noqa: F401
from situation_scale.models.round import Round  # noqa: F401
from situation_scale.models.situation import Situation  # noqa: F401
