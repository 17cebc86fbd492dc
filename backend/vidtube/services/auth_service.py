"""Authentication service for password hashing and JWT tokens."""

import base64
import hashlib
from datetime import datetime, timedelta, timezone
from typing import Dict, Any

import bcrypt
from jose import jwt, JWTError

from vidtube.config import Settings
from vidtube.exceptions import UnauthorizedError
from vidtube.models.user import User


def _prehash(password: str) -> bytes:
    """SHA-256 pre-hash to avoid bcrypt's 72-byte truncation."""
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str) -> str:
    """Return bcrypt hash of password (SHA-256 pre-hashed before bcrypt)."""
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Return True if password matches hashed."""
    try:
        return bool(bcrypt.checkpw(_prehash(password), hashed.encode("utf-8")))
    except (ValueError, TypeError):
        return False


class AuthService:
    """Service for issuing and validating access and refresh tokens."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def create_access_token(self, user: User) -> str:
        """
        Create a JWT access token.

        Args:
            user: Token subject

        Returns:
            Encoded JWT token
        """
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=self.settings.access_token_expire_minutes
        )
        to_encode = {
            "sub": user.id,
            "username": user.username,
            "email": user.email,
            "full_name": user.full_name,
            "exp": expire,
            "type": "access",
        }
        return jwt.encode(
            to_encode, self.settings.secret_key, algorithm=self.settings.algorithm
        )

    def create_refresh_token(self, user: User) -> str:
        """
        Create a JWT refresh token.

        Args:
            user: Token subject

        Returns:
            Encoded JWT refresh token
        """
        expire = datetime.now(timezone.utc) + timedelta(
            days=self.settings.refresh_token_expire_days
        )
        to_encode = {"sub": user.id, "exp": expire, "type": "refresh"}
        return jwt.encode(
            to_encode, self.settings.refresh_secret_key, algorithm=self.settings.algorithm
        )

    def create_tokens_for_user(self, user: User) -> Dict[str, str]:
        """
        Create both access and refresh tokens for a user.

        Returns:
            Dictionary with access_token and refresh_token
        """
        return {
            "access_token": self.create_access_token(user),
            "refresh_token": self.create_refresh_token(user),
        }

    def _decode(self, token: str, secret: str, expected_type: str) -> Dict[str, Any]:
        try:
            payload = jwt.decode(token, secret, algorithms=[self.settings.algorithm])
        except JWTError:
            raise UnauthorizedError("Invalid or expired token")

        if payload.get("type") != expected_type or not payload.get("sub"):
            raise UnauthorizedError("Invalid token type")
        return payload

    def decode_access_token(self, token: str) -> str:
        """Return the user id carried by a valid access token."""
        return self._decode(token, self.settings.secret_key, "access")["sub"]

    def decode_refresh_token(self, token: str) -> str:
        """Return the user id carried by a valid refresh token."""
        return self._decode(token, self.settings.refresh_secret_key, "refresh")["sub"]
