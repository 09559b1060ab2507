from typing import AsyncGenerator
from unittest.mock import patch

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from haccp_journal.core.database.entities import User
from test.unit_test.factories import make_user


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with mocked lifespan and overridden dependencies."""
    from haccp_journal.core.database.session import get_session
    from haccp_journal.server.main import app

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override

    # Mock the lifespan to prevent database initialization during tests
    async def mock_lifespan(app):
        yield

    with patch("haccp_journal.server.main.lifespan", mock_lifespan):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def owner(session: AsyncSession) -> User:
    """Active account owning the rows created by a test."""
    return await make_user(session, email="owner@example.com")


@pytest_asyncio.fixture
async def other_user(session: AsyncSession) -> User:
    """Second active account used for ownership checks."""
    return await make_user(session, email="other@example.com", manager_name="Georgi Georgiev")


@pytest_asyncio.fixture
async def admin(session: AsyncSession) -> User:
    """Active administrator."""
    return await make_user(session, email="admin@example.com", role="admin", manager_name="Admin")
