"""
Tests for token issuing/verification and password hashing.
"""

from datetime import timedelta

import pytest
from jose import jwt

from feedhub.core.config import settings
from feedhub.core.errors import AppError, ErrorKind
from feedhub.core.security import (
    create_access_token,
    decode_token,
    extract_bearer_token,
    get_password_hash,
    verify_password,
)


class TestAccessToken:
    """Tests for create_access_token / decode_token."""

    def test_round_trip_keeps_user_id(self):
        token = create_access_token({"id": "5f1d7c2e9b1e8a3d4c6b2a10", "email": "a@b.com"})
        payload = decode_token(token)

        assert payload["id"] == "5f1d7c2e9b1e8a3d4c6b2a10"
        assert payload["sub"] == "5f1d7c2e9b1e8a3d4c6b2a10"
        assert payload["email"] == "a@b.com"
        assert "exp" in payload

    def test_expired_token_rejected(self):
        token = create_access_token({"id": "abc"}, expires_delta=timedelta(seconds=-5))

        with pytest.raises(AppError) as exc_info:
            decode_token(token)
        assert exc_info.value.kind == ErrorKind.UNAUTHENTICATED
        assert exc_info.value.status_code == 401

    def test_wrong_signature_rejected(self):
        forged = jwt.encode({"id": "abc"}, "not-the-secret", algorithm=settings.ALGORITHM)

        with pytest.raises(AppError):
            decode_token(forged)

    def test_garbage_rejected(self):
        with pytest.raises(AppError):
            decode_token("not.a.jwt")

    def test_missing_user_id_is_a_programming_error(self):
        with pytest.raises(ValueError):
            create_access_token({"email": "a@b.com"})


class TestBearerHeader:
    """Tests for Authorization header parsing."""

    @pytest.mark.parametrize("header,expected", [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("bearer abc", "abc"),
        ("Bearer    spaced  ", "spaced"),
    ])
    def test_valid_headers(self, header, expected):
        assert extract_bearer_token(header) == expected

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer ", "Basic dXNlcjpwdw==", "abc.def.ghi"])
    def test_invalid_headers(self, header):
        assert extract_bearer_token(header) is None


def test_password_hash_verifies():
    hashed = get_password_hash("secret123")

    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)
