from sqlalchemy import Column, String, DateTime, Text, ForeignKey, Index

from vidtube.database import Base
from vidtube.models.common import ContentType, content_type_column_type, new_id, utcnow


class Comment(Base):
    """Comment on a video or a tweet.

    The parent is an explicit (parent_type, parent_id) pair; parent_type is
    either ContentType.VIDEO or ContentType.TWEET.
    """

    __tablename__ = "comments"

    id = Column(String(32), primary_key=True, default=new_id)
    content = Column(Text, nullable=False)
    owner_id = Column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    parent_type = Column(content_type_column_type(), nullable=False)
    parent_id = Column(String(32), nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_comment_parent", "parent_type", "parent_id", "created_at"),
    )

    PARENT_TYPES = (ContentType.VIDEO, ContentType.TWEET)
