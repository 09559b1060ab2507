"""
Unit tests for FastAPI application lifespan management.

Tests verify that startup initializes the database and that a failing
initialization does not prevent the server from starting.
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI

from haccp_journal.core.database import session as db_session
from haccp_journal.server.main import lifespan


class TestLifespanStartup:
    """Test application startup lifespan events."""

    async def test_lifespan_startup_initializes_database(self):
        with patch("haccp_journal.server.main.init_db", new_callable=AsyncMock) as mock_init:
            async with lifespan(FastAPI()):
                mock_init.assert_awaited_once()

    async def test_lifespan_survives_database_failure(self, caplog):
        with patch("haccp_journal.server.main.init_db", new_callable=AsyncMock, side_effect=RuntimeError("down")):
            with caplog.at_level("ERROR"):
                async with lifespan(FastAPI()):
                    pass
        assert "Database initialization failed" in caplog.text


class TestInitDb:
    """Test schema creation switch."""

    async def test_skips_create_all_by_default(self):
        with (
            patch.object(db_session.settings, "db_create_all", False),
            patch.object(db_session, "create_all", new_callable=AsyncMock) as mock_create,
        ):
            await db_session.init_db()
        mock_create.assert_not_awaited()

    async def test_create_all_when_enabled(self):
        with (
            patch.object(db_session.settings, "db_create_all", True),
            patch.object(db_session, "create_all", new_callable=AsyncMock) as mock_create,
        ):
            await db_session.init_db()
        mock_create.assert_awaited_once_with(db_session.engine)


@pytest.mark.parametrize("path", ["/api/v1/openapi.json", "/api/v1/docs"])
async def test_docs_are_served_under_api_prefix(client, path):
    response = await client.get(path)
    assert response.status_code == 200
