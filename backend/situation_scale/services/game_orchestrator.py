"""Game Orchestrator — every state-changing game command, one transaction each.

Invariants:
    - Follows impureim sandwich: load state -> pure rule check (core/) -> store writes
    - Each command commits once; any failure rolls back, so no partial state remains
    - Events are published only after a successful commit, and carry the same
      view objects the REST response returns
    - A Prompt is marked used in the same commit that creates its Round
    - Hidden numbers never depend on the submitted position

Design Decisions:
    - Store and publisher injected (GameStore / RoomPublisher protocols): routes build
      one orchestrator per request around the request's DB session
    - rng injectable: room codes, colors and hidden numbers are reproducible in tests
"""

import logging
import random
from contextlib import asynccontextmanager
from typing import AsyncIterator
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from situation_scale.config import Settings, get_settings
from situation_scale.core.domain_types import GameCommand, GameStatus, RoomEvent
from situation_scale.core.errors import (
    AlreadySubmittedError,
    ErrorContext,
    GameError,
    NotFoundError,
    PersistenceError,
)
from situation_scale.core.game_rules import (
    check_can_join,
    check_can_move,
    check_can_start,
    check_command_allowed,
    next_round_number,
    validate_player_name,
    validate_position,
    validate_situation_content,
)
from situation_scale.core.player_colors import HOST_COLOR, pick_player_color
from situation_scale.core.repository_protocols import (
    GameLike, GameStore, PromptLike, RoomPublisher, RoundLike,
)
from situation_scale.core.room_codes import generate_room_code, normalize_room_code
from situation_scale.core.scoring import draw_hidden_number, score_round
from situation_scale.core.themes import resolve_prompt_texts
from situation_scale.schemas.game import (
    AdvanceRoundResponse,
    CreateGameResponse,
    GameView,
    JoinGameResponse,
    PlayerView,
    PromptView,
    ResultsResponse,
    RoundStartedResponse,
    RoundView,
    SetupResponse,
    SituationView,
    SnapshotResponse,
    SubmitSituationResponse,
    SuccessResponse,
)

logger = logging.getLogger(__name__)


class GameOrchestrator:
    """Phase transitions, round lifecycle, situations and scoring for one request."""

    def __init__(
        self,
        store: GameStore,
        publisher: RoomPublisher,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ):
        self.store = store
        self.publisher = publisher
        self.settings = settings or get_settings()
        self._rng = rng

    # ─── Lobby ───────────────────────────────────────────────────

    async def create_game(self, host_name: str) -> CreateGameResponse:
        name = validate_player_name(host_name, "hostName")
        async with self._unit_of_work("create_game"):
            room_code = await self._allocate_room_code()
            game = await self.store.create_game(room_code, GameStatus.LOBBY.value)
            host = await self.store.create_player(
                game.id, name, HOST_COLOR, is_host=True,
            )
        logger.info("Game created", extra={"room_code": room_code})
        return CreateGameResponse(
            game=GameView.model_validate(game),
            host=PlayerView.model_validate(host),
        )

    async def join_game(
        self, room_code: str, player_name: str,
    ) -> JoinGameResponse:
        name = validate_player_name(player_name, "playerName")
        room_code = normalize_room_code(room_code)
        async with self._unit_of_work("join_game", room_code):
            game = await self._load_game(room_code)
            players = await self.store.list_players(game.id)
            check_can_join(
                game.status, len(players), self.settings.max_players,
                ErrorContext(room_code=room_code),
            )
            color = pick_player_color((p.color for p in players), self._rng)
            player = await self.store.create_player(
                game.id, name, color, is_host=False,
            )
        view = PlayerView.model_validate(player)
        self._publish(room_code, RoomEvent.PLAYER_JOINED, {"player": view.to_payload()})
        return JoinGameResponse(game=GameView.model_validate(game), player=view)

    async def get_snapshot(self, room_code: str) -> SnapshotResponse:
        room_code = normalize_room_code(room_code)
        async with self._unit_of_work("get_snapshot", room_code):
            game = await self._load_game(room_code)
            players = await self.store.list_players(game.id)
            prompts = await self.store.list_prompts(game.id)
            rounds = await self.store.list_rounds(game.id)
            current_round = None
            situations = []
            if game.current_round_id:
                current_round = await self.store.get_round(game.current_round_id)
                if current_round:
                    situations = await self.store.list_situations_with_players(
                        current_round.id,
                    )
        return SnapshotResponse(
            game=GameView.model_validate(game),
            players=[PlayerView.model_validate(p) for p in players],
            prompts=[PromptView.model_validate(p) for p in prompts],
            rounds=[RoundView.model_validate(r) for r in rounds],
            current_round=(
                RoundView.model_validate(current_round) if current_round else None
            ),
            situations=[SituationView.model_validate(s) for s in situations],
        )

    async def configure_setup(
        self,
        room_code: str,
        theme: str | None = None,
        custom_prompts: list[str] | None = None,
    ) -> SetupResponse:
        """Append prompts from a theme or a custom list. Never clears earlier prompts."""
        room_code = normalize_room_code(room_code)
        async with self._unit_of_work("configure_setup", room_code):
            game = await self._load_game(room_code)
            check_command_allowed(
                GameCommand.CONFIGURE, game.status, ErrorContext(room_code=room_code),
            )
            label, texts = resolve_prompt_texts(
                theme, custom_prompts, self.settings.min_custom_prompts,
            )
            await self.store.create_prompts(game.id, texts)
            if label:
                await self.store.set_theme(game, label)
        response = SetupResponse(theme=label, prompt_texts=texts)
        self._publish(
            room_code, RoomEvent.SETUP_UPDATED,
            {"theme": label, "promptTexts": texts},
        )
        return response

    # ─── Rounds ──────────────────────────────────────────────────

    async def start_game(self, room_code: str) -> RoundStartedResponse:
        room_code = normalize_room_code(room_code)
        async with self._unit_of_work("start_game", room_code):
            game = await self._load_game(room_code)
            players = await self.store.list_players(game.id)
            unused = await self.store.list_unused_prompts(game.id)
            check_can_start(
                game.status, len(players), len(unused),
                self.settings.min_players, ErrorContext(room_code=room_code),
            )
            round_ = await self._open_round(game, unused[0])
        response = RoundStartedResponse(
            round=RoundView.model_validate(round_),
            prompt=PromptView.model_validate(unused[0]),
        )
        logger.info(
            "Game started",
            extra={"room_code": room_code, "round_number": round_.round_number},
        )
        self._publish(room_code, RoomEvent.GAME_STARTED, response.to_payload())
        return response

    async def start_free_round(self, room_code: str) -> SuccessResponse:
        room_code = normalize_room_code(room_code)
        async with self._unit_of_work("start_free_round", room_code):
            game = await self._load_game(room_code)
            check_command_allowed(
                GameCommand.FREE_ROUND, game.status, ErrorContext(room_code=room_code),
            )
            await self.store.set_game_status(game, GameStatus.FREE_ROUND.value)
        self._publish(room_code, RoomEvent.FREE_ROUND_STARTED, {})
        return SuccessResponse()

    async def compute_results(self, room_code: str) -> ResultsResponse:
        room_code = normalize_room_code(room_code)
        async with self._unit_of_work("compute_results", room_code):
            game = await self._load_game(room_code)
            round_ = await self._load_current_round(game)
            check_command_allowed(
                GameCommand.RESULTS, game.status,
                ErrorContext(room_code=room_code, round_number=round_.round_number),
            )
            situations = await self.store.list_situations_with_players(round_.id)
            score = score_round(situations)
            await self.store.mark_round_completed(round_)
            await self.store.set_game_status(game, GameStatus.SHOW_RESULTS.value)
        response = ResultsResponse(
            player_order=[SituationView.model_validate(s) for s in score.player_order],
            actual_order=[SituationView.model_validate(s) for s in score.actual_order],
            accuracy=score.accuracy,
            matches=score.matches,
            total=score.total,
        )
        logger.info(
            f"Round scored {score.matches}/{score.total} ({score.accuracy}%)",
            extra={"room_code": room_code, "round_number": round_.round_number},
        )
        self._publish(room_code, RoomEvent.RESULTS_READY, response.to_payload())
        return response

    async def advance_round(self, room_code: str) -> AdvanceRoundResponse:
        """Next unused prompt becomes a new round, or the game completes."""
        room_code = normalize_room_code(room_code)
        async with self._unit_of_work("advance_round", room_code):
            game = await self._load_game(room_code)
            check_command_allowed(
                GameCommand.ADVANCE, game.status, ErrorContext(room_code=room_code),
            )
            unused = await self.store.list_unused_prompts(game.id)
            round_ = None
            if unused:
                round_ = await self._open_round(game, unused[0])
            else:
                await self.store.set_game_status(game, GameStatus.COMPLETED.value)
                await self.store.set_current_round(game, None)

        if round_ is None:
            logger.info("Game completed", extra={"room_code": room_code})
            self._publish(room_code, RoomEvent.GAME_COMPLETED, {})
            return AdvanceRoundResponse(completed=True)

        response = AdvanceRoundResponse(
            completed=False,
            round=RoundView.model_validate(round_),
            prompt=PromptView.model_validate(unused[0]),
        )
        self._publish(
            room_code, RoomEvent.NEXT_ROUND_STARTED,
            {"round": response.round.to_payload(), "prompt": response.prompt.to_payload()},
        )
        return response

    # ─── Situations ──────────────────────────────────────────────

    async def submit_situation(
        self, room_code: str, player_id: UUID, content: str, position: float,
    ) -> SubmitSituationResponse:
        content = validate_situation_content(content)
        position = validate_position(position)
        room_code = normalize_room_code(room_code)
        async with self._unit_of_work("submit_situation", room_code):
            game = await self._load_game(room_code)
            round_ = await self._load_current_round(game)
            context = ErrorContext(
                room_code=room_code, round_number=round_.round_number,
            )
            check_command_allowed(GameCommand.SUBMIT, game.status, context)
            player = await self.store.get_player(player_id)
            if player is None or player.game_id != game.id:
                raise NotFoundError("Player", str(player_id), context)
            if await self.store.find_situation(round_.id, player.id):
                raise AlreadySubmittedError(context)
            situation = await self.store.create_situation(
                round_.id, player.id, content,
                number=draw_hidden_number(self._rng),
                position=position,
            )
        view = SituationView.model_validate(situation)
        logger.info(
            "Situation submitted",
            extra={
                "room_code": room_code,
                "round_number": round_.round_number,
                "player_id": str(player_id),
            },
        )
        self._publish(
            room_code, RoomEvent.SITUATION_CREATED, {"situation": view.to_payload()},
        )
        return SubmitSituationResponse(situation=view)

    async def update_position(
        self,
        situation_id: UUID,
        position: float,
        room_code: str,
        player_id: UUID | None = None,
    ) -> SuccessResponse:
        """Move a situation. Ownership is enforced only when player_id is given."""
        position = validate_position(position)
        room_code = normalize_room_code(room_code)
        async with self._unit_of_work("update_position", room_code):
            situation = await self.store.get_situation(situation_id)
            if situation is None:
                raise NotFoundError("Situation", str(situation_id))
            game = await self._load_game(room_code)
            if situation.round_id != game.current_round_id:
                raise NotFoundError(
                    "Situation", str(situation_id), ErrorContext(room_code=room_code),
                )
            check_can_move(situation.player_id, player_id, game.status)
            await self.store.update_situation_position(situation, position)
        self._publish(
            room_code, RoomEvent.SITUATION_MOVED,
            {"situationId": str(situation_id), "position": position},
        )
        return SuccessResponse()

    # ─── Helpers ─────────────────────────────────────────────────

    @asynccontextmanager
    async def _unit_of_work(
        self, operation: str, room_code: str | None = None,
    ) -> AsyncIterator[None]:
        """Commit on success; roll back and map store failures to PersistenceError."""
        try:
            yield
            await self.store.commit()
        except GameError:
            await self.store.rollback()
            raise
        except SQLAlchemyError as e:
            await self.store.rollback()
            logger.error(
                f"{operation} failed in entity store: {e}",
                extra={"room_code": room_code},
            )
            raise PersistenceError(operation, ErrorContext(room_code=room_code))

    async def _load_game(self, room_code: str) -> GameLike:
        game = await self.store.get_game_by_room_code(room_code)
        if game is None:
            raise NotFoundError("Game", room_code)
        return game

    async def _load_current_round(self, game: GameLike) -> RoundLike:
        round_ = None
        if game.current_round_id:
            round_ = await self.store.get_round(game.current_round_id)
        if round_ is None:
            raise NotFoundError(
                "Round", f"current round of {game.room_code}",
                ErrorContext(room_code=game.room_code),
            )
        return round_

    async def _open_round(self, game: GameLike, prompt: PromptLike) -> RoundLike:
        """Create the next round from `prompt` and make it current. Same transaction."""
        number = next_round_number(await self.store.count_rounds(game.id))
        round_ = await self.store.create_round(game.id, prompt.id, number)
        await self.store.mark_prompt_used(prompt)
        await self.store.set_game_status(game, GameStatus.IN_PROGRESS.value)
        await self.store.set_current_round(game, round_.id)
        return round_

    async def _allocate_room_code(self) -> str:
        for _ in range(self.settings.room_code_attempts):
            code = generate_room_code(self._rng, self.settings.room_code_length)
            if not await self.store.room_code_exists(code):
                return code
        logger.error("Room code space exhausted after retries")
        raise PersistenceError("allocate_room_code")

    def _publish(self, room_code: str, event: RoomEvent, payload: dict) -> None:
        self.publisher.publish(room_code, event.value, payload)
