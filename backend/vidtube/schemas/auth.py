from vidtube.schemas.common import CamelModel
from vidtube.schemas.user import UserResponse


class Token(CamelModel):
    """JWT token pair."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class LoginRequest(CamelModel):
    """Login by username or email."""

    username: str | None = None
    email: str | None = None
    password: str


class RefreshRequest(CamelModel):
    """Refresh token in the body; the refreshToken cookie is used otherwise."""

    refresh_token: str | None = None


class AuthResponse(Token):
    """Token pair plus the authenticated user."""

    user: UserResponse
