from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from vidtube.database import Base
from vidtube.models.common import new_id, utcnow


class Playlist(Base):
    """User-curated playlist."""

    __tablename__ = "playlists"

    id = Column(String(32), primary_key=True, default=new_id)
    owner_id = Column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="playlists")
    playlist_videos = relationship(
        "PlaylistVideo", back_populates="playlist", cascade="all, delete-orphan"
    )


class PlaylistVideo(Base):
    """Association table for playlist-video many-to-many relationship with ordering."""

    __tablename__ = "playlist_videos"

    id = Column(String(32), primary_key=True, default=new_id)
    playlist_id = Column(
        String(32),
        ForeignKey("playlists.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    video_id = Column(
        String(32), ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Position in playlist
    position = Column(Integer, nullable=False)

    # Timestamps
    added_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    playlist = relationship("Playlist", back_populates="playlist_videos")
    video = relationship("Video", back_populates="playlist_videos")

    # Composite index
    __table_args__ = (
        Index("idx_playlist_video", "playlist_id", "video_id", unique=True),
        Index("idx_playlist_position", "playlist_id", "position"),
    )
