"""
This file contains shared fixtures and configuration for the test suite.

Pytest will automatically discover and use the fixtures defined in this file.

The environment is pointed at an in-memory SQLite database before any
application module is imported, so the test run never touches a real server.
"""

import os

os.environ["TODO_DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_TO_FILE"] = "false"

from collections.abc import AsyncGenerator, Generator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from todo_app.db import reset_db  # noqa: E402
from todo_app.models import Base  # noqa: E402
from todo_app.services import TaskService, UserService  # noqa: E402


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    A session on a private in-memory database with all tables created.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    async with session_maker() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def user_service() -> UserService:
    return UserService()


@pytest.fixture
def task_service() -> TaskService:
    return TaskService()


@pytest.fixture
def app() -> FastAPI:
    """
    Create a new application instance for each test.
    """
    # Import the factory function here to ensure the environment above is applied.
    from main import create_app

    return create_app()


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    Test client with the application's lifespan running and an empty database.
    """
    with TestClient(app) as c:
        # Run on the client's own event loop, where the app's engine lives.
        c.portal.call(reset_db)
        yield c
