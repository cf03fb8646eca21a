"""Situation Routes — position updates addressed by situation id."""

from uuid import UUID

from fastapi import APIRouter, Depends

from situation_scale.api.dependencies import get_orchestrator
from situation_scale.schemas.game import SuccessResponse, UpdatePositionRequest
from situation_scale.services.game_orchestrator import GameOrchestrator

router = APIRouter(prefix="/api/v1/situations", tags=["situations"])


@router.put("/{situation_id}/position", response_model=SuccessResponse)
async def update_position(
    situation_id: UUID,
    body: UpdatePositionRequest,
    orchestrator: GameOrchestrator = Depends(get_orchestrator),
):
    """Move a situation on the scale. playerId, when sent, is checked for ownership."""
    return await orchestrator.update_position(
        situation_id, body.position, body.room_code, body.player_id,
    )
