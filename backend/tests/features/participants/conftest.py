"""
Database fixtures for storage tests.

Each test gets its own SQLite file. Async code is driven with asyncio.run.
"""

import asyncio

import pytest
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from noskrien.db.session import enable_sqlite_savepoints
from noskrien.features.participants.models import Participant, Race
from noskrien.models.base import Base


@pytest.fixture
def session_factory(tmp_path):
    """Session factory bound to a fresh database with all tables."""
    db_path = tmp_path / "test.db"
    sync_engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(bind=sync_engine)
    sync_engine.dispose()

    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    enable_sqlite_savepoints(engine)
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def run_db(session_factory):
    """Run an async callable taking a session, return its result."""
    def runner(func):
        async def main():
            async with session_factory() as session:
                return await func(session)
        return asyncio.run(main())
    return runner


def _make_participant(name, distance="Tautas", gender="V", races=(), normalized_name=None):
    """Participant row with races given as (date, result, km, location) tuples."""
    return Participant(
        name=name,
        normalized_name=normalized_name,
        distance=distance,
        gender=gender,
        season="2023-2024",
        races=[
            Race(date=date, result=result, km=km, location=location, season="2023-2024")
            for date, result, km, location in races
        ],
    )


@pytest.fixture
def make_participant():
    """Factory for Participant rows with races."""
    return _make_participant

