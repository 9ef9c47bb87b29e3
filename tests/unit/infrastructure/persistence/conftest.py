from typing import AsyncIterator

import pytest_asyncio
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncEngine

from ht6.config import DatabaseConfig
from ht6.infrastructure.persistence.database import create_db_engine, create_tables
from ht6.infrastructure.persistence.tables import season_table


@pytest_asyncio.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """In-memory SQLite engine with all tables and one season (S26)."""
    engine = create_db_engine(DatabaseConfig(url="sqlite+aiosqlite:///:memory:"))
    await create_tables(engine)
    async with engine.begin() as conn:
        await conn.execute(insert(season_table).values(season_id="season-1", season_code="S26"))
    yield engine
    await engine.dispose()
