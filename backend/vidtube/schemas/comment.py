from datetime import datetime

from vidtube.models.common import ContentType
from vidtube.schemas.common import CamelModel
from vidtube.schemas.user import OwnerSummary


class CommentCreate(CamelModel):
    content: str


class CommentUpdate(CamelModel):
    content: str


class CommentView(CamelModel):
    """Comment with its author and like rollup."""

    id: str
    content: str
    owner_id: str
    parent_type: ContentType
    parent_id: str
    created_at: datetime
    updated_at: datetime
    owner: OwnerSummary | None = None
    likes_count: int = 0
    is_liked: bool = False
