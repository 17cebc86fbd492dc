from datetime import datetime

from vidtube.schemas.comment import CommentView
from vidtube.schemas.common import CamelModel
from vidtube.schemas.user import OwnerSummary, VideoOwner


class VideoBase(CamelModel):
    """Base video schema."""

    id: str
    owner_id: str
    video_url: str
    thumbnail_url: str
    title: str
    description: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime
    updated_at: datetime


class VideoCard(VideoBase):
    """Video as listed in feeds, playlists and history."""

    owner: OwnerSummary | None = None


class VideoDetail(VideoBase):
    """Video detail with owner, like and comment rollups."""

    owner: VideoOwner | None = None
    likes_count: int = 0
    is_liked: bool = False
    comments: list[CommentView] = []
    comments_count: int = 0


class DashboardVideo(VideoBase):
    """Owner's own video with engagement counts."""

    likes_count: int = 0
    comments_count: int = 0
