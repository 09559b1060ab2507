"""
Unit tests for Logfire middleware.

This test suite covers:
- Request/response processing
- Performance metrics collection
- Error handling and exception tracking
- Slow request detection
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import Request
from starlette.responses import Response

from haccp_journal.server.middleware.logfire_middleware import LogfireMiddleware


def _request(method: str = "GET", path: str = "/api/v1/businesses") -> Request:
    request = AsyncMock(spec=Request)
    request.method = method
    request.url.path = path
    request.state = MagicMock()
    return request


class TestLogfireMiddlewareDispatch:
    """Test LogfireMiddleware.dispatch method."""

    async def test_middleware_processes_successful_request(self):
        async def call_next(request):
            return Response(content="ok", status_code=200)

        middleware = LogfireMiddleware(app=AsyncMock())
        with patch("haccp_journal.server.middleware.logfire_middleware.log_api_request") as mock_log:
            response = await middleware.dispatch(_request(), call_next)

        assert response.status_code == 200
        assert "X-Process-Time" in response.headers
        kwargs = mock_log.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["path"] == "/api/v1/businesses"
        assert kwargs["status_code"] == 200
        assert kwargs["duration_ms"] >= 0

    async def test_middleware_records_failures_and_reraises(self):
        async def call_next(request):
            raise RuntimeError("boom")

        middleware = LogfireMiddleware(app=AsyncMock())
        with patch("haccp_journal.server.middleware.logfire_middleware.log_api_request") as mock_log:
            with pytest.raises(RuntimeError):
                await middleware.dispatch(_request("POST"), call_next)

        assert mock_log.call_args.kwargs["status_code"] == 500

    async def test_slow_requests_are_warned(self):
        async def call_next(request):
            return Response(status_code=204)

        middleware = LogfireMiddleware(app=AsyncMock())
        with (
            patch("haccp_journal.server.middleware.logfire_middleware.SLOW_REQUEST_MS", -1),
            patch("haccp_journal.server.middleware.logfire_middleware.log_api_request"),
            patch("haccp_journal.server.middleware.logfire_middleware.logger") as mock_logger,
        ):
            await middleware.dispatch(_request(), call_next)

        mock_logger.warning.assert_called_once()
        assert "Slow API request" in mock_logger.warning.call_args[0][0]


async def test_process_time_header_on_real_requests(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert float(response.headers["X-Process-Time"]) >= 0
