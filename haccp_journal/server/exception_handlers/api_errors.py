"""
Handlers for expected request failures.

Both domain errors and request validation failures are rendered with the
common ``{"error": ..., "code": ...}`` body.
"""

from typing import Any

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from haccp_journal.core.errors import ApiError
from haccp_journal.core.logging_config import get_logger

logger = get_logger(__name__)


def validation_error_code(error: dict[str, Any]) -> str:
    """
    Derive a machine-readable code from one pydantic error.

    Custom errors raised with an upper-case type carry their own code.
    Otherwise the offending field gives ``MISSING_<FIELD>`` for absent or
    blank values and ``INVALID_<FIELD>`` for everything else.

    Args:
        error: A single entry of ``RequestValidationError.errors()``

    Returns:
        The error code
    """
    error_type = error.get("type", "")
    if error_type and error_type.isupper():
        return error_type

    fields = [part for part in error.get("loc", ()) if isinstance(part, str) and part not in ("body", "query", "path")]
    field = fields[-1].upper() if fields else "BODY"

    blank = error_type == "string_too_short" and not str(error.get("input") or "").strip()
    if error_type == "missing" or blank:
        return f"MISSING_{field}"
    return f"INVALID_{field}"


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Render an :class:`ApiError` raised by a route."""
    logger.info(
        f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}",
        extra={"code": exc.code, "status_code": exc.status_code},
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as 400 with a field-derived code."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    code = validation_error_code(first) if first else "INVALID_REQUEST"
    message = first.get("msg", "Invalid request")
    logger.info(f"Validation failed for {request.method} {request.url.path}: {code}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message, "code": code, "details": jsonable_encoder(errors)},
    )
