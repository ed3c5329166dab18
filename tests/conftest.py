"""Pytest configuration and shared fixtures."""

import random

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select

from personachat.config import Settings
from personachat.server.database import ChatMessage, ChatSession, init_db
from personachat.server import create_app
from personachat.server.seed import seed_catalog
from personachat.stores import DemoStore, LiveStore


# ============================================================================
# Configuration
# ============================================================================

@pytest.fixture
def rng():
    """Seeded random source so canned replies are reproducible."""
    return random.Random(1234)


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from the developer's environment and .env file."""
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        BACKEND_URL="http://test",
        ANON_KEY=None,
        SERVICE_ROLE_KEY=None,
        DEEPSEEK_API_KEY=None,
        MODE_FLAG_PATH=str(tmp_path / "demo_mode"),
    )


# ============================================================================
# Stores
# ============================================================================

@pytest.fixture
def demo_store(rng):
    """Fresh demo store with the seeded catalog."""
    return DemoStore(rng=rng)


# ============================================================================
# Server
# ============================================================================

@pytest.fixture
async def make_app(settings, rng):
    """
    Factory for seeded apps.

    ``completion_handler`` routes provider calls to an httpx.MockTransport;
    keyword overrides are applied to the settings.
    """
    apps = []

    async def _factory(completion_handler=None, **overrides):
        app_settings = settings.model_copy(update=overrides)
        transport = httpx.MockTransport(completion_handler) if completion_handler else None
        app = create_app(app_settings, completion_transport=transport, rng=rng)
        await init_db(app.state.engine)
        await seed_catalog(app.state.session_maker)
        apps.append(app)
        return app

    yield _factory

    for app in apps:
        await app.state.engine.dispose()


@pytest.fixture
async def app(make_app):
    """Seeded app answering with canned replies."""
    return await make_app()


@pytest.fixture
async def client(app):
    """Create an async HTTP client for testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def live_store(client):
    """Live store talking to the in-process app."""
    async with LiveStore("http://test", client=client) as store:
        yield store


# ============================================================================
# Test Utilities
# ============================================================================

class TableCounter:
    """Counts rows directly in the app's database."""

    def __init__(self, app):
        self.app = app

    async def _count(self, model, **filters) -> int:
        query = select(func.count()).select_from(model)
        for key, value in filters.items():
            query = query.where(getattr(model, key) == value)
        async with self.app.state.session_maker() as session:
            result = await session.execute(query)
            return result.scalar_one()

    async def sessions(self, **filters) -> int:
        return await self._count(ChatSession, **filters)

    async def messages(self, **filters) -> int:
        return await self._count(ChatMessage, **filters)


@pytest.fixture
def counter(app):
    return TableCounter(app)
