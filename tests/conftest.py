"""Pytest configuration and shared fixtures.

Organization:
    - Settings Fixtures: isolate cached settings between tests
    - Row Fixtures: in-memory rows for the engine and in-memory adapter
    - Database Fixtures: SQLAlchemy engine, session, and a test model
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import DateTime, Integer, String
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Keep developer .env files and shell exports out of the test run
for _key in list(os.environ):
    if _key.startswith(("PAGINATION_", "LOG_")):
        os.environ.pop(_key)


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Reset cached settings so monkeypatched env vars take effect."""
    from pagination_service.core.settings import clear_all_caches

    clear_all_caches()
    yield
    clear_all_caches()


# ============================================================================
# Row Fixtures
# ============================================================================


@dataclass
class Row:
    """Plain row object read through attribute access."""

    id: int
    created_at: datetime
    score: int = 0
    name: str = ""


BASE_TIME = datetime(2024, 1, 1, tzinfo=UTC)


def make_rows(count: int, *, score_every: int = 1) -> list[Row]:
    """Build ``count`` rows one minute apart; ``score`` repeats in runs of ``score_every``."""
    return [
        Row(
            id=i,
            created_at=BASE_TIME + timedelta(minutes=i),
            score=i // score_every,
            name=f"row-{i:03d}",
        )
        for i in range(1, count + 1)
    ]


@pytest.fixture
def row_factory():
    """Factory building rows; see ``make_rows``."""
    return make_rows


@pytest.fixture
def rows() -> list[Row]:
    """Twenty-five rows with distinct timestamps."""
    return make_rows(25)


@pytest.fixture
def three_day_rows() -> list[dict[str, object]]:
    """Mapping rows created on 2023-01-01, 2023-01-02 and 2023-01-03."""
    return [
        {"id": 1, "created_at": datetime(2023, 1, 1, tzinfo=UTC)},
        {"id": 2, "created_at": datetime(2023, 1, 2, tzinfo=UTC)},
        {"id": 3, "created_at": datetime(2023, 1, 3, tzinfo=UTC)},
    ]


# ============================================================================
# Database Fixtures
# ============================================================================


class Base(DeclarativeBase):
    """Declarative base for test-only models."""


class Item(Base):
    """Model used to exercise the SQLAlchemy adapter."""

    __tablename__ = "items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50))
    created_at: Mapped[datetime] = mapped_column(DateTime())
    score: Mapped[int] = mapped_column(Integer, default=0)
    tenant: Mapped[str] = mapped_column(String(20), default="acme")
    rank: Mapped[int | None] = mapped_column(Integer, nullable=True, default=None)


@pytest.fixture
def item_model() -> type[Item]:
    """The mapped test model."""
    return Item


@pytest.fixture
async def db_engine():
    """Create in-memory SQLite engine with the test schema."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession]:
    """Session bound to the in-memory engine, rolled back after the test."""
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def seeded_session(db_session: AsyncSession) -> AsyncSession:
    """Session with 12 items for tenant ``acme`` and 3 for tenant ``globex``.

    Timestamps are naive UTC, one minute apart; ``score`` repeats in pairs.
    """
    base = datetime(2024, 1, 1)
    db_session.add_all(
        [
            Item(
                id=i,
                name=f"item-{i:02d}",
                created_at=base + timedelta(minutes=i),
                score=i // 2,
                tenant="acme",
            )
            for i in range(1, 13)
        ]
        + [
            Item(id=100 + i, name=f"other-{i}", created_at=base + timedelta(minutes=i), tenant="globex")
            for i in range(1, 4)
        ]
    )
    await db_session.flush()
    return db_session
