import asyncio
import os
import sys
from collections.abc import Iterable

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# main.py refuses to start without an explicit origin list.
os.environ.setdefault("ALLOWED_ORIGINS", "http://testserver")
# Honour any externally provided DATABASE_URL but default to in-memory SQLite.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

# Register every model with the declarative Base before create_all runs.
from spare_time import db, models  # noqa: F401


@pytest.fixture()
def api_client():
    """A TestClient on the real app, backed by a fresh in-memory database."""

    from spare_time.main import app

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    session_maker = sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

    async def init_schema() -> None:
        async with engine.begin() as conn:
            await conn.run_sync(db.Base.metadata.create_all)

    asyncio.run(init_schema())

    async def override_get_session() -> Iterable[AsyncSession]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[db.get_session] = override_get_session
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client, session_maker

    app.dependency_overrides.clear()
    asyncio.run(engine.dispose())
