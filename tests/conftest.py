"""Shared test fixtures."""

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine

from todobot.config import Settings
from todobot.core.store import GuildStore
from todobot.db.engine import create_engine, init_schema


@pytest.fixture
def settings() -> Settings:
    """Test settings with defaults."""
    return Settings(todobot_env="development", database_url="sqlite+aiosqlite:///:memory:")


@pytest.fixture
async def engine(tmp_path) -> AsyncEngine:
    """A file-backed SQLite engine with all tables.

    File-backed so concurrent sessions each get their own connection.
    """
    eng = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'todos.db'}")
    await init_schema(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
def store(engine: AsyncEngine) -> GuildStore:
    return GuildStore(engine)
