"""
API error type.

Every expected failure of a request handler (validation, authentication,
ownership, missing rows) is raised as :class:`ApiError` and rendered by the
server's exception handlers as ``{"error": <message>, "code": <CODE>}``.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import status


class ApiError(Exception):
    """An error with an HTTP status and a machine-readable code."""

    def __init__(self, status_code: int, code: str, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details

    def to_content(self) -> dict[str, Any]:
        content: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.details is not None:
            content["details"] = self.details
        return content

    def __repr__(self) -> str:
        return f"ApiError(status_code={self.status_code}, code={self.code!r}, message={self.message!r})"


def bad_request(code: str, message: str) -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, code, message)


def unauthorized(message: str = "Unauthorized - Invalid or missing token") -> ApiError:
    return ApiError(status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED", message)


def forbidden(message: str = "Access denied", code: str = "FORBIDDEN") -> ApiError:
    return ApiError(status.HTTP_403_FORBIDDEN, code, message)


def not_found(code: str, message: str) -> ApiError:
    return ApiError(status.HTTP_404_NOT_FOUND, code, message)


def conflict(code: str, message: str) -> ApiError:
    return ApiError(status.HTTP_409_CONFLICT, code, message)
