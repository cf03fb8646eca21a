"""SQL Game Store — async SQLAlchemy implementation of the GameStore protocol.

Invariants:
    - Methods add/flush but never commit; the caller owns the transaction
    - Listing order is deterministic: players by join time, prompts by ordinal,
      rounds by round_number, situations by creation time
    - Prompt ordinals continue from the game's current maximum (additive setup)
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from situation_scale.models import Game, Player, Prompt, Round, Situation


class SqlGameStore:
    """GameStore backed by one AsyncSession (one unit of work per request)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Game ────────────────────────────────────────────────────

    async def create_game(self, room_code: str, status: str) -> Game:
        game = Game(room_code=room_code, status=status)
        self.db.add(game)
        await self.db.flush()
        return game

    async def get_game(self, game_id: UUID) -> Game | None:
        return await self.db.get(Game, game_id)

    async def get_game_by_room_code(self, room_code: str) -> Game | None:
        result = await self.db.execute(
            select(Game).where(Game.room_code == room_code),
        )
        return result.scalar_one_or_none()

    async def room_code_exists(self, room_code: str) -> bool:
        result = await self.db.execute(
            select(func.count()).select_from(Game)
            .where(Game.room_code == room_code),
        )
        return result.scalar_one() > 0

    async def set_game_status(self, game: Game, status: str) -> None:
        game.status = status

    async def set_current_round(self, game: Game, round_id: UUID | None) -> None:
        game.current_round_id = round_id

    async def set_theme(self, game: Game, theme: str | None) -> None:
        game.theme = theme

    # ─── Player ──────────────────────────────────────────────────

    async def create_player(
        self, game_id: UUID, name: str, color: str, is_host: bool,
    ) -> Player:
        player = Player(
            game_id=game_id, name=name, color=color, is_host=is_host,
        )
        self.db.add(player)
        await self.db.flush()
        return player

    async def get_player(self, player_id: UUID) -> Player | None:
        return await self.db.get(Player, player_id)

    async def list_players(self, game_id: UUID) -> Sequence[Player]:
        result = await self.db.execute(
            select(Player).where(Player.game_id == game_id)
            .order_by(Player.joined_at, Player.id),
        )
        return result.scalars().all()

    # ─── Prompt ──────────────────────────────────────────────────

    async def create_prompt(self, game_id: UUID, text: str) -> Prompt:
        prompts = await self.create_prompts(game_id, [text])
        return prompts[0]

    async def create_prompts(
        self, game_id: UUID, texts: Sequence[str],
    ) -> Sequence[Prompt]:
        result = await self.db.execute(
            select(func.coalesce(func.max(Prompt.ordinal), 0))
            .where(Prompt.game_id == game_id),
        )
        start = result.scalar_one()
        prompts = [
            Prompt(game_id=game_id, text=text, used=False, ordinal=start + i)
            for i, text in enumerate(texts, start=1)
        ]
        self.db.add_all(prompts)
        await self.db.flush()
        return prompts

    async def list_prompts(self, game_id: UUID) -> Sequence[Prompt]:
        result = await self.db.execute(
            select(Prompt).where(Prompt.game_id == game_id)
            .order_by(Prompt.ordinal),
        )
        return result.scalars().all()

    async def list_unused_prompts(self, game_id: UUID) -> Sequence[Prompt]:
        result = await self.db.execute(
            select(Prompt)
            .where(Prompt.game_id == game_id, Prompt.used.is_(False))
            .order_by(Prompt.ordinal),
        )
        return result.scalars().all()

    async def mark_prompt_used(self, prompt: Prompt) -> None:
        prompt.used = True

    # ─── Round ───────────────────────────────────────────────────

    async def create_round(
        self, game_id: UUID, prompt_id: UUID, round_number: int,
    ) -> Round:
        round_ = Round(
            game_id=game_id,
            prompt_id=prompt_id,
            round_number=round_number,
            is_free_round=False,
            completed=False,
        )
        self.db.add(round_)
        await self.db.flush()
        return round_

    async def get_round(self, round_id: UUID) -> Round | None:
        return await self.db.get(Round, round_id)

    async def list_rounds(self, game_id: UUID) -> Sequence[Round]:
        result = await self.db.execute(
            select(Round).where(Round.game_id == game_id)
            .order_by(Round.round_number),
        )
        return result.scalars().all()

    async def count_rounds(self, game_id: UUID) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(Round)
            .where(Round.game_id == game_id),
        )
        return result.scalar_one()

    async def mark_round_completed(self, round_: Round) -> None:
        round_.completed = True

    # ─── Situation ───────────────────────────────────────────────

    async def create_situation(
        self, round_id: UUID, player_id: UUID, content: str,
        number: int, position: float,
    ) -> Situation:
        situation = Situation(
            round_id=round_id,
            player_id=player_id,
            content=content,
            number=number,
            position=position,
        )
        self.db.add(situation)
        await self.db.flush()
        await self.db.refresh(situation, attribute_names=["player"])
        return situation

    async def get_situation(self, situation_id: UUID) -> Situation | None:
        return await self.db.get(Situation, situation_id)

    async def find_situation(
        self, round_id: UUID, player_id: UUID,
    ) -> Situation | None:
        result = await self.db.execute(
            select(Situation).where(
                Situation.round_id == round_id,
                Situation.player_id == player_id,
            ),
        )
        return result.unique().scalar_one_or_none()

    async def list_situations_with_players(
        self, round_id: UUID,
    ) -> Sequence[Situation]:
        result = await self.db.execute(
            select(Situation).where(Situation.round_id == round_id)
            .order_by(Situation.created_at, Situation.id),
        )
        return result.unique().scalars().all()

    async def update_situation_position(
        self, situation: Situation, position: float,
    ) -> None:
        situation.position = position
        await self.db.flush()

    # ─── Unit of work ────────────────────────────────────────────

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()
