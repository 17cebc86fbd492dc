from sqlalchemy import Column, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from vidtube.database import Base
from vidtube.models.common import new_id, utcnow


class WatchHistoryEntry(Base):
    """Ordered, deduplicated set of videos a user has opened."""

    __tablename__ = "watch_history"

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    video_id = Column(
        String(32), ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True
    )
    watched_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="watch_history")

    __table_args__ = (
        Index("idx_watch_history_user_video", "user_id", "video_id", unique=True),
    )
