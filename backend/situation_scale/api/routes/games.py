"""Game Routes — lobby, setup and round-lifecycle commands for one room.

Invariants:
    - Routes never contain game rules; every handler is one orchestrator call
    - Room codes in the path are accepted in any case (normalized downstream)
    - GameError propagates to the global handler (api/error_handlers.py)
"""

from fastapi import APIRouter, Depends, status

from situation_scale.schemas.game import (
    AdvanceRoundResponse,
    CreateGameRequest,
    CreateGameResponse,
    JoinGameRequest,
    JoinGameResponse,
    ResultsResponse,
    RoundStartedResponse,
    SetupRequest,
    SetupResponse,
    SnapshotResponse,
    SubmitSituationRequest,
    SubmitSituationResponse,
    SuccessResponse,
)
from situation_scale.api.dependencies import get_orchestrator
from situation_scale.services.game_orchestrator import GameOrchestrator

router = APIRouter(prefix="/api/v1/games", tags=["games"])


@router.post(
    "", response_model=CreateGameResponse, status_code=status.HTTP_200_OK,
)
async def create_game(
    body: CreateGameRequest,
    orchestrator: GameOrchestrator = Depends(get_orchestrator),
):
    """Open a new room in LOBBY with the caller as host."""
    return await orchestrator.create_game(body.host_name)


@router.post("/{room_code}/join", response_model=JoinGameResponse)
async def join_game(
    room_code: str,
    body: JoinGameRequest,
    orchestrator: GameOrchestrator = Depends(get_orchestrator),
):
    return await orchestrator.join_game(room_code, body.player_name)


@router.get("/{room_code}", response_model=SnapshotResponse)
async def get_game(
    room_code: str,
    orchestrator: GameOrchestrator = Depends(get_orchestrator),
):
    """Full snapshot: game, players, prompts, rounds, current round + situations."""
    return await orchestrator.get_snapshot(room_code)


@router.put("/{room_code}/setup", response_model=SetupResponse)
async def configure_setup(
    room_code: str,
    body: SetupRequest,
    orchestrator: GameOrchestrator = Depends(get_orchestrator),
):
    return await orchestrator.configure_setup(
        room_code, body.theme, body.custom_prompts,
    )


@router.post("/{room_code}/start", response_model=RoundStartedResponse)
async def start_game(
    room_code: str,
    orchestrator: GameOrchestrator = Depends(get_orchestrator),
):
    return await orchestrator.start_game(room_code)


@router.post("/{room_code}/situations", response_model=SubmitSituationResponse)
async def submit_situation(
    room_code: str,
    body: SubmitSituationRequest,
    orchestrator: GameOrchestrator = Depends(get_orchestrator),
):
    return await orchestrator.submit_situation(
        room_code, body.player_id, body.content, body.position,
    )


@router.post("/{room_code}/free-round", response_model=SuccessResponse)
async def start_free_round(
    room_code: str,
    orchestrator: GameOrchestrator = Depends(get_orchestrator),
):
    return await orchestrator.start_free_round(room_code)


@router.post("/{room_code}/results", response_model=ResultsResponse)
async def compute_results(
    room_code: str,
    orchestrator: GameOrchestrator = Depends(get_orchestrator),
):
    return await orchestrator.compute_results(room_code)


@router.post("/{room_code}/next-round", response_model=AdvanceRoundResponse)
async def advance_round(
    room_code: str,
    orchestrator: GameOrchestrator = Depends(get_orchestrator),
):
    """Start the next round, or complete the game when prompts run out."""
    return await orchestrator.advance_round(room_code)
