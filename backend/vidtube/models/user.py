from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.orm import relationship

from vidtube.database import Base
from vidtube.models.common import new_id, utcnow


class User(Base):
    """User model; every user is also a channel."""

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    username = Column(String(64), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=False, index=True)

    # Avatar is required, cover image is optional (both columns set or both null)
    avatar_url = Column(String(512), nullable=False)
    avatar_asset_id = Column(String(255), nullable=False)
    cover_image_url = Column(String(512), nullable=True)
    cover_image_asset_id = Column(String(255), nullable=True)

    password_hash = Column(String(255), nullable=False)
    refresh_token = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    videos = relationship("Video", back_populates="owner")
    playlists = relationship("Playlist", back_populates="owner")
    watch_history = relationship(
        "WatchHistoryEntry",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="WatchHistoryEntry.watched_at",
    )
