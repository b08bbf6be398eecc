"""Integration-test fixtures.

Each test gets a fresh SessionService bound to the real asyncio scheduler,
swapped into the router in place of the process-wide instance. Match timing
is shortened so full-time can be observed within a test.
"""

from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from config.settings import Settings
from src.kb_session.api import router as session_router
from src.kb_session.application.service import SessionService
from src.main import app

FAST_MATCH = {
    "MATCH_DURATION_MS": 400,
    "GOAL_DWELL_MS": 100,
    "TICK_INTERVAL_MS": 20,
    "KICKOFF_SEED": 7,
}


@pytest.fixture
def service(monkeypatch: pytest.MonkeyPatch) -> Generator[SessionService, None, None]:
    svc = SessionService(Settings(**FAST_MATCH))
    monkeypatch.setattr(session_router, "_service", svc)
    yield svc
    svc.shutdown()


@pytest_asyncio.fixture
async def client(service: SessionService) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
