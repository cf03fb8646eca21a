"""Room Broadcast — room code -> live listener handles, fire-and-forget fan-out.

Invariants:
    - A handle belongs to at most one room; join() moves it if already registered
    - publish() delivers {"event": name, "data": payload} as one JSON text frame
      to every open handle of the room, and never raises for a bad handle
    - Closed, errored or backed-up handles are dropped from their room
    - Per-handle order == publish order (one queue + one send loop per connection)
    - Empty rooms are forgotten; nothing is reported to the orchestrator

Design Decisions:
    - threading.Lock around the maps, publish iterates a snapshot: membership changes
      are single insert/remove operations, sends never happen under the lock
    - Bounded outbound queue: a consumer that falls behind by socket_send_queue_size
      frames counts as a transport error
"""

import asyncio
import json
import logging
import threading
from typing import Any, Protocol

from fastapi import WebSocket
from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)


class ListenerHandle(Protocol):
    """What the registry needs from a connection."""

    @property
    def is_open(self) -> bool: ...

    def enqueue(self, message: str) -> None: ...


def encode_envelope(event: str, payload: Any) -> str:
    return json.dumps({"event": event, "data": payload}, default=str)


class RoomConnection:
    """One WebSocket plus its outbound queue and send loop."""

    def __init__(self, websocket: WebSocket, queue_size: int = 256):
        self.websocket = websocket
        self._queue: asyncio.Queue[str] = asyncio.Queue(maxsize=queue_size)
        self._failed = False

    @property
    def is_open(self) -> bool:
        return (
            not self._failed
            and self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    def enqueue(self, message: str) -> None:
        """Raises asyncio.QueueFull when the consumer is too far behind."""
        self._queue.put_nowait(message)

    async def send_loop(self) -> None:
        """Drain the queue into the socket until cancelled or the send fails."""
        while True:
            message = await self._queue.get()
            try:
                await self.websocket.send_text(message)
            except Exception as e:
                self._failed = True
                logger.info(f"Room socket send failed, dropping listener: {e}")
                return


class RoomBroadcaster:
    """Thread-safe registry of room listeners."""

    def __init__(self):
        self._lock = threading.Lock()
        self._rooms: dict[str, set[ListenerHandle]] = {}
        self._room_of: dict[ListenerHandle, str] = {}

    def join(self, room_code: str, handle: ListenerHandle) -> None:
        with self._lock:
            self._remove_locked(handle)
            self._rooms.setdefault(room_code, set()).add(handle)
            self._room_of[handle] = room_code
        logger.debug("Listener joined room", extra={"room_code": room_code})

    def leave(self, handle: ListenerHandle) -> str | None:
        """Deregister `handle`. Returns the room it was in, if any."""
        with self._lock:
            return self._remove_locked(handle)

    def listeners(self, room_code: str) -> list[ListenerHandle]:
        with self._lock:
            return list(self._rooms.get(room_code, ()))

    def room_codes(self) -> list[str]:
        with self._lock:
            return list(self._rooms)

    def publish(self, room_code: str, event: str, payload: Any) -> int:
        """Deliver to every open listener of the room. Returns the delivery count."""
        message = encode_envelope(event, payload)
        delivered = 0
        for handle in self.listeners(room_code):
            if not handle.is_open:
                self.leave(handle)
                continue
            try:
                handle.enqueue(message)
            except Exception as e:
                logger.warning(
                    f"Dropping listener that could not accept {event}: {e!r}",
                    extra={"room_code": room_code, "event": event},
                )
                self.leave(handle)
                continue
            delivered += 1
        logger.debug(
            f"Published {event}",
            extra={"room_code": room_code, "event": event, "listeners": delivered},
        )
        return delivered

    def _remove_locked(self, handle: ListenerHandle) -> str | None:
        room_code = self._room_of.pop(handle, None)
        if room_code is None:
            return None
        members = self._rooms.get(room_code)
        if members is not None:
            members.discard(handle)
            if not members:
                del self._rooms[room_code]
        return room_code
