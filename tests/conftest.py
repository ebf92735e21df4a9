import os
import sys

import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import app.models  # noqa: E402,F401
from app.core.db import Base, enable_sqlite_savepoints  # noqa: E402
from app.progression.engine import ProgressionEngine  # noqa: E402
from app.stores.sessions import SqlSessionStore  # noqa: E402
from app.stores.suggestions import SqlSuggestionStore  # noqa: E402
from app.stores.templates import SqlTemplateStore  # noqa: E402
from factories import GymData  # noqa: E402


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    enable_sqlite_savepoints(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def gym(db):
    return GymData(db)


@pytest_asyncio.fixture
async def progression(db):
    return ProgressionEngine(
        sessions=SqlSessionStore(db),
        suggestions=SqlSuggestionStore(db),
        templates=SqlTemplateStore(db),
    )
