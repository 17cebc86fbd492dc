from datetime import datetime

from vidtube.schemas.common import CamelModel
from vidtube.schemas.user import OwnerSummary


class TweetView(CamelModel):
    """Tweet with author, like and comment rollups."""

    id: str
    content: str
    owner_id: str
    image_url: str | None = None
    created_at: datetime
    updated_at: datetime
    owner: OwnerSummary | None = None
    likes_count: int = 0
    is_liked: bool = False
    comments_count: int = 0
