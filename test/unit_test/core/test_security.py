"""Unit tests for password hashing and access tokens."""

import jwt
import pytest

from haccp_journal.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

SECRET = "unit-test-secret"


class TestPasswords:
    """Test bcrypt hashing."""

    def test_hash_is_not_plain_text(self):
        hashed = hash_password("secret123")
        assert hashed != "secret123"
        assert hashed.startswith("$2")

    def test_salts_differ(self):
        assert hash_password("secret123") != hash_password("secret123")

    def test_verify(self):
        hashed = hash_password("secret123")
        assert verify_password("secret123", hashed) is True
        assert verify_password("wrong-password", hashed) is False

    def test_verify_rejects_non_bcrypt_hash(self):
        assert verify_password("secret123", "plain-text") is False


class TestAccessTokens:
    """Test JWT issuing and validation."""

    def test_round_trip_claims(self):
        token = create_access_token(42, "owner@example.com", "user", secret=SECRET)
        payload = decode_access_token(token, SECRET)
        assert payload["user_id"] == 42
        assert payload["sub"] == "42"
        assert payload["email"] == "owner@example.com"
        assert payload["role"] == "user"
        assert payload["exp"] > payload["iat"]

    def test_expired_token(self):
        token = create_access_token(1, "a@example.com", "user", secret=SECRET, expire_days=-1)
        with pytest.raises(jwt.ExpiredSignatureError):
            decode_access_token(token, SECRET)

    def test_wrong_secret(self):
        token = create_access_token(1, "a@example.com", "user", secret=SECRET)
        with pytest.raises(jwt.InvalidSignatureError):
            decode_access_token(token, "another-secret")

    def test_token_without_user_id(self):
        token = jwt.encode({"sub": "1", "email": "a@example.com"}, SECRET, algorithm="HS256")
        with pytest.raises(jwt.InvalidTokenError):
            decode_access_token(token, SECRET)

    def test_malformed_token(self):
        with pytest.raises(jwt.PyJWTError):
            decode_access_token("not-a-token", SECRET)
