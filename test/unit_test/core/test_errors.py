"""Unit tests for the API error type and its factories."""

import pytest

from haccp_journal.core.errors import (
    ApiError,
    bad_request,
    conflict,
    forbidden,
    not_found,
    unauthorized,
)


@pytest.mark.parametrize(
    "error,status_code,code",
    [
        (bad_request("MISSING_EIK", "EIK is required"), 400, "MISSING_EIK"),
        (unauthorized(), 401, "UNAUTHORIZED"),
        (forbidden(), 403, "FORBIDDEN"),
        (forbidden("No", code="ESTABLISHMENT_ACCESS_DENIED"), 403, "ESTABLISHMENT_ACCESS_DENIED"),
        (not_found("DEVICE_NOT_FOUND", "Device not found"), 404, "DEVICE_NOT_FOUND"),
        (conflict("EMAIL_EXISTS", "Email already exists"), 409, "EMAIL_EXISTS"),
    ],
)
def test_factories(error, status_code, code):
    assert isinstance(error, ApiError)
    assert error.status_code == status_code
    assert error.code == code


def test_content_without_details():
    error = not_found("USER_NOT_FOUND", "User not found")
    assert error.to_content() == {"error": "User not found", "code": "USER_NOT_FOUND"}
    assert str(error) == "User not found"


def test_content_with_details():
    error = ApiError(400, "INVALID_EMAIL", "Invalid email", details=[{"loc": ["email"]}])
    assert error.to_content()["details"] == [{"loc": ["email"]}]
