"""Service test fixtures — async DB, recording publisher, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so readiness probes hit the test engine
    - Every client gets a fresh RoomBroadcaster on app.state

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for command tests
      (PostgreSQL-specific features not exercised here)
    - RecordingPublisher stands in for the broadcaster in orchestrator tests, so
      assertions read the exact (room, event, payload) triples
"""

import random

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from situation_scale.config import Settings
from situation_scale.db.base import Base
from situation_scale.infrastructure.database import get_db, DatabaseSessionManager
from situation_scale.infrastructure.game_store import SqlGameStore
from situation_scale.infrastructure.room_broadcast import RoomBroadcaster
from situation_scale.services.game_orchestrator import GameOrchestrator
import situation_scale.infrastructure.database as db_module
import situation_scale.models  # noqa: F401
from situation_scale.main import app


class RecordingPublisher:
    """RoomPublisher that remembers every publish call."""

    def __init__(self):
        self.events: list[tuple[str, str, object]] = []

    def publish(self, room_code, event, payload):
        self.events.append((room_code, event, payload))
        return 0

    def names(self) -> list[str]:
        return [event for _, event, _ in self.events]

    def last(self, event: str):
        return next(p for _, e, p in reversed(self.events) if e == event)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def settings():
    return Settings(database_url="sqlite+aiosqlite:///:memory:")


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
def orchestrator(test_db, publisher, settings):
    return GameOrchestrator(
        SqlGameStore(test_db), publisher, settings, rng=random.Random(42),
    )


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    original_broadcaster = app.state.broadcaster
    app.state.broadcaster = RoomBroadcaster()

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.broadcaster = original_broadcaster
    db_module.db_manager = original_manager


@pytest.fixture
def started_game(orchestrator):
    """Factory: host + (players - 1) guests, theme configured, round 1 open."""

    async def _start(players: int = 3, theme: str = "life-events"):
        created = await orchestrator.create_game("Host")
        code = created.game.room_code
        guests = [
            (await orchestrator.join_game(code, f"Guest {i}")).player
            for i in range(1, players)
        ]
        await orchestrator.configure_setup(code, theme=theme)
        started = await orchestrator.start_game(code)
        return code, created.host, guests, started

    return _start
