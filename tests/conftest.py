"""
Test configuration and fixtures for Podium

Every test gets its own in-memory SQLite database (aiosqlite + StaticPool)
with foreign keys enforced, so ON DELETE SET NULL behaves as in production.

Usage:
    pytest tests/
"""

import os

# Settings are read at import time; point them at throwaway resources first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ["RUN_MIGRATIONS_ON_STARTUP"] = "false"
os.environ.pop("REDIS_URL", None)
os.environ.pop("SENTRY_DSN", None)

from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import podium.models  # noqa: F401
from podium.core.auth import create_access_token
from podium.db.base import Base
from podium.db.session import enable_sqlite_foreign_keys, get_db
from podium.main import app
from podium.models.account import Account
from podium.models.enums import AccountRole
from tests.fixtures.database import (
    create_test_account,
    create_test_event,
    create_test_special_bet,
)

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_engine():
    """
    Create a fresh in-memory database with every table.

    StaticPool keeps the single connection alive, so all sessions in a
    test see the same database.
    """
    engine = create_async_engine(
        TEST_DB_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def async_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def test_app(session_factory) -> AsyncGenerator[FastAPI, None]:
    """App with the database dependency pointed at the test engine."""

    async def get_test_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = get_test_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def test_client(test_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        yield client


def auth_headers(account: Account) -> dict:
    """Bearer header for an account, without going through login."""
    token = create_access_token({"sub": str(account.id)})
    return {"Authorization": f"Bearer {token}"}


# Test data fixtures
@pytest.fixture
async def alice(async_session: AsyncSession) -> Account:
    return await create_test_account(async_session, "alice", display_name="Alice")


@pytest.fixture
async def bob(async_session: AsyncSession) -> Account:
    return await create_test_account(async_session, "bob", display_name="Bob")


@pytest.fixture
async def bettor(async_session: AsyncSession) -> Account:
    """An ordinary account with the starting balance of 50."""
    return await create_test_account(async_session, "bettor", display_name="Bettor")


@pytest.fixture
async def admin_account(async_session: AsyncSession) -> Account:
    return await create_test_account(async_session, "admin", role=AccountRole.ADMIN.value)


@pytest.fixture
async def event(async_session: AsyncSession, alice, bob):
    """Alice vs Bob, today."""
    return await create_test_event(async_session, [alice, bob], title="Alice vs Bob", moneylines=[-150, 130])


@pytest.fixture
async def special_bet(async_session: AsyncSession, admin_account):
    return await create_test_special_bet(async_session, "Rain stops play", odds=250, created_by=admin_account.id)
