"""Tests for password hashing and token issuing."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from vidtube.config import Settings
from vidtube.exceptions import UnauthorizedError
from vidtube.models import User
from vidtube.services.auth_service import AuthService, hash_password, verify_password


@pytest.fixture
def auth() -> AuthService:
    return AuthService(Settings(secret_key="access-secret", refresh_secret_key="refresh-secret"))


@pytest.fixture
def user() -> User:
    return User(id="a" * 32, username="alice", email="alice@example.com", full_name="Alice")


def test_hash_and_verify() -> None:
    hashed = hash_password("s3cret")
    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("s3cret", "not-a-bcrypt-hash")


def test_long_passwords_are_not_truncated() -> None:
    base = "x" * 80
    hashed = hash_password(base + "1")
    assert not verify_password(base + "2", hashed)


def test_access_token_round_trip(auth, user) -> None:
    token = auth.create_access_token(user)
    assert auth.decode_access_token(token) == user.id

    claims = jwt.get_unverified_claims(token)
    assert claims["username"] == "alice"
    assert claims["type"] == "access"


def test_token_types_are_not_interchangeable(auth, user) -> None:
    tokens = auth.create_tokens_for_user(user)

    assert auth.decode_refresh_token(tokens["refresh_token"]) == user.id
    with pytest.raises(UnauthorizedError):
        auth.decode_refresh_token(tokens["access_token"])
    with pytest.raises(UnauthorizedError):
        auth.decode_access_token(tokens["refresh_token"])


def test_expired_and_garbage_tokens(auth, user) -> None:
    expired = jwt.encode(
        {
            "sub": user.id,
            "type": "access",
            "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
        },
        "access-secret",
        algorithm="HS256",
    )
    with pytest.raises(UnauthorizedError, match="Invalid or expired token"):
        auth.decode_access_token(expired)
    with pytest.raises(UnauthorizedError):
        auth.decode_access_token("garbage")
