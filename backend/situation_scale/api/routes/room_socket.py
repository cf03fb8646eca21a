"""Room Socket — /ws?roomCode=XXXXXX, server→client notifications plus cosmetic relays.

Invariants:
    - One RoomConnection per socket, registered in exactly one room until disconnect
    - Inbound frames never mutate game state; only PASSTHROUGH_EVENTS are relayed
    - Relays go to the whole room, the sender included (same as REST-driven events)
    - A malformed frame is dropped; the connection stays open

Design Decisions:
    - Sender task per connection drains RoomConnection's queue, so publish() from
      REST handlers never awaits a slow socket
    - Missing roomCode closes with 1008 (policy violation) before joining any room
"""

import asyncio
import contextlib
import json
import logging

from fastapi import APIRouter, Depends, Query, WebSocket, status

from situation_scale.api.dependencies import get_broadcaster
from situation_scale.config import Settings, get_settings
from situation_scale.core.room_codes import normalize_room_code
from situation_scale.infrastructure.room_broadcast import RoomBroadcaster, RoomConnection

logger = logging.getLogger(__name__)
router = APIRouter(tags=["room"])

# inbound event -> relayed event name
PASSTHROUGH_EVENTS: dict[str, str] = {
    "mouse:move": "mouse:move:update",
    "drag:move": "drag:move:update",
    "click:event": "click:event:update",
    "game:tick": "game:tick",
}


def parse_client_frame(message: str) -> tuple[str, object] | None:
    """Decode {"event", "data"}. None for anything that is not a relayable event."""
    try:
        envelope = json.loads(message)
    except ValueError:
        return None
    if not isinstance(envelope, dict):
        return None
    event = envelope.get("event")
    if not isinstance(event, str):
        return None
    relayed = PASSTHROUGH_EVENTS.get(event)
    if relayed is None:
        return None
    return relayed, envelope.get("data")


@router.websocket("/ws")
async def room_socket(
    websocket: WebSocket,
    room_code: str | None = Query(None, alias="roomCode"),
    broadcaster: RoomBroadcaster = Depends(get_broadcaster),
    settings: Settings = Depends(get_settings),
):
    code = normalize_room_code(room_code or "")
    if not code:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    connection = RoomConnection(websocket, settings.socket_send_queue_size)
    broadcaster.join(code, connection)
    sender = asyncio.create_task(connection.send_loop())
    logger.info("Room socket connected", extra={"room_code": code})
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            frame = parse_client_frame(message.get("text") or "")
            if frame is None:
                logger.debug(
                    "Ignoring unrecognised room frame", extra={"room_code": code},
                )
                continue
            event, data = frame
            broadcaster.publish(code, event, data)
    finally:
        broadcaster.leave(connection)
        sender.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sender
        logger.info("Room socket disconnected", extra={"room_code": code})
