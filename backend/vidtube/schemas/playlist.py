from datetime import datetime

from vidtube.schemas.common import CamelModel
from vidtube.schemas.user import OwnerSummary
from vidtube.schemas.video import VideoCard


class PlaylistCreate(CamelModel):
    """Schema for creating a playlist."""

    name: str
    description: str


class PlaylistUpdate(CamelModel):
    """Schema for updating playlist."""

    name: str | None = None
    description: str | None = None


class PlaylistResponse(CamelModel):
    """Playlist row without joins."""

    id: str
    owner_id: str
    name: str
    description: str
    created_at: datetime
    updated_at: datetime


class PlaylistView(PlaylistResponse):
    """Playlist with owner and ordered videos."""

    owner: OwnerSummary | None = None
    videos: list[VideoCard] = []
    video_count: int = 0


class PlaylistDetail(PlaylistView):
    total_views: int = 0
