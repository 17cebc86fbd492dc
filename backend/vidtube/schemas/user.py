from datetime import datetime

from pydantic import EmailStr

from vidtube.schemas.common import CamelModel


class OwnerSummary(CamelModel):
    """Public summary of a user embedded in other documents."""

    id: str
    username: str
    full_name: str
    avatar_url: str


class VideoOwner(OwnerSummary):
    """Owner summary enriched for the video detail page."""

    subscribers_count: int = 0
    is_subscribed: bool = False


class UserResponse(CamelModel):
    """User response schema (never carries credentials)."""

    id: str
    username: str
    email: str
    full_name: str
    avatar_url: str
    cover_image_url: str | None = None
    created_at: datetime
    updated_at: datetime


class ChannelProfile(CamelModel):
    """Channel page: user plus subscription rollups."""

    id: str
    username: str
    email: str
    full_name: str
    avatar_url: str
    cover_image_url: str | None = None
    subscribers_count: int = 0
    channel_subscribed_to_count: int = 0
    is_subscribed: bool = False
    created_at: datetime


class UpdateAccountRequest(CamelModel):
    """Schema for updating account details."""

    full_name: str | None = None
    email: EmailStr | None = None


class ChangePasswordRequest(CamelModel):
    old_password: str
    new_password: str
