"""Room Listener — client-side subscriber that keeps a GameProjection current.

Invariants:
    - Every decoded {"event", "data"} frame is folded through apply_event, in order
    - Malformed frames are logged and skipped; they never end the connection
    - On unexpected closure the listener reconnects to the same room after a fixed
      delay, with no upper bound on attempts, until stop() is called
    - stop() is the only way out of run(); it closes the live transport

Design Decisions:
    - Transport injected as a connect factory: the listener knows nothing about the
      socket library, so tests drive it with in-memory fakes
    - sleep injected alongside: reconnect timing is observable without waiting
    - No resync on reconnect: the caller decides whether to refetch a snapshot
"""

import asyncio
import json
import logging
from typing import Awaitable, Callable, Protocol

from situation_scale.core.game_projection import GameProjection, apply_event

logger = logging.getLogger(__name__)


class RoomTransport(Protocol):
    """One open connection to /ws?roomCode=... ; receive_text raises once closed."""

    async def receive_text(self) -> str: ...

    async def close(self) -> None: ...


ConnectFactory = Callable[[str], Awaitable[RoomTransport]]
ChangeCallback = Callable[[GameProjection, str], None]


def decode_envelope(message: str) -> tuple[str, dict] | None:
    """Parse one frame. Returns (event, data) or None when the frame is unusable."""
    try:
        envelope = json.loads(message)
    except (TypeError, ValueError):
        return None
    if not isinstance(envelope, dict):
        return None
    event = envelope.get("event")
    if not isinstance(event, str) or not event:
        return None
    data = envelope.get("data")
    return event, data if isinstance(data, dict) else {}


class RoomListener:
    """Follows one room, reconnecting on drop, and folds events into a projection."""

    def __init__(
        self,
        room_code: str,
        connect: ConnectFactory,
        projection: GameProjection | None = None,
        reconnect_delay: float = 3.0,
        on_change: ChangeCallback | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.room_code = room_code
        self.projection = projection or GameProjection(room_code=room_code)
        self.reconnect_delay = reconnect_delay
        self.connections = 0
        self._connect = connect
        self._on_change = on_change
        self._sleep = sleep
        self._transport: RoomTransport | None = None
        self._stopped = False

    @property
    def stopped(self) -> bool:
        return self._stopped

    def handle_message(self, message: str) -> GameProjection:
        """Apply one raw frame to the projection."""
        decoded = decode_envelope(message)
        if decoded is None:
            logger.warning(
                "Discarding malformed room frame",
                extra={"room_code": self.room_code},
            )
            return self.projection
        event, data = decoded
        try:
            self.projection = apply_event(self.projection, event, data)
        except (KeyError, TypeError) as e:
            logger.warning(
                f"Discarding {event} frame with missing fields: {e!r}",
                extra={"room_code": self.room_code, "event": event},
            )
            return self.projection
        if self._on_change:
            self._on_change(self.projection, event)
        return self.projection

    async def run(self) -> None:
        while not self._stopped:
            try:
                self._transport = await self._connect(self.room_code)
                self.connections += 1
                logger.info(
                    "Room listener connected",
                    extra={"room_code": self.room_code},
                )
                while not self._stopped:
                    self.handle_message(await self._transport.receive_text())
            except asyncio.CancelledError:
                raise
            except Exception as e:
                if self._stopped:
                    break
                logger.info(
                    f"Room connection lost ({e!r}), retrying in "
                    f"{self.reconnect_delay}s",
                    extra={"room_code": self.room_code},
                )
            finally:
                self._transport = None
            if not self._stopped:
                await self._sleep(self.reconnect_delay)

    async def stop(self) -> None:
        self._stopped = True
        transport, self._transport = self._transport, None
        if transport is not None:
            await transport.close()
