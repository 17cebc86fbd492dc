from sqlalchemy import (
    Column,
    String,
    DateTime,
    Text,
    ForeignKey,
    Boolean,
    Float,
    Integer,
    Index,
)
from sqlalchemy.orm import relationship

from vidtube.database import Base
from vidtube.models.common import new_id, utcnow


class Video(Base):
    """Uploaded video with its hosted assets."""

    __tablename__ = "videos"

    id = Column(String(32), primary_key=True, default=new_id)
    owner_id = Column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Hosted assets
    video_url = Column(String(512), nullable=False)
    video_asset_id = Column(String(255), nullable=False)
    thumbnail_url = Column(String(512), nullable=False)
    thumbnail_asset_id = Column(String(255), nullable=False)

    # Video details
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=False)
    duration = Column(Float, default=0, nullable=False)  # seconds
    views = Column(Integer, default=0, nullable=False)
    is_published = Column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="videos")
    playlist_videos = relationship(
        "PlaylistVideo", back_populates="video", cascade="all, delete-orphan"
    )

    # Composite index for the public feed
    __table_args__ = (
        Index("idx_video_published_created", "is_published", "created_at"),
        Index("idx_video_owner_created", "owner_id", "created_at"),
    )
