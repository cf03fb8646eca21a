"""Request Dependencies — wire one GameOrchestrator per request.

Invariants:
    - The orchestrator's store wraps the request's own AsyncSession (get_db)
    - The broadcaster is the single RoomBroadcaster on app.state, shared by
      REST commands and the /ws route

Design Decisions:
    - Broadcaster read from app.state (not a module global): tests build a fresh app
      state or override get_broadcaster without patching imports
"""

from fastapi import Depends
from starlette.requests import HTTPConnection
from sqlalchemy.ext.asyncio import AsyncSession

from situation_scale.config import Settings, get_settings
from situation_scale.infrastructure.database import get_db
from situation_scale.infrastructure.game_store import SqlGameStore
from situation_scale.infrastructure.room_broadcast import RoomBroadcaster
from situation_scale.services.game_orchestrator import GameOrchestrator


def get_broadcaster(connection: HTTPConnection) -> RoomBroadcaster:
    """Shared by HTTP routes and the /ws route."""
    return connection.app.state.broadcaster


async def get_orchestrator(
    db: AsyncSession = Depends(get_db),
    broadcaster: RoomBroadcaster = Depends(get_broadcaster),
    settings: Settings = Depends(get_settings),
) -> GameOrchestrator:
    return GameOrchestrator(SqlGameStore(db), broadcaster, settings)
