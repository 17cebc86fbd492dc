from sqlalchemy import Column, String, DateTime, Text, ForeignKey

from vidtube.database import Base
from vidtube.models.common import new_id, utcnow


class Tweet(Base):
    """Short text post with an optional image."""

    __tablename__ = "tweets"

    id = Column(String(32), primary_key=True, default=new_id)
    content = Column(Text, nullable=False)
    owner_id = Column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    image_url = Column(String(512), nullable=True)
    image_asset_id = Column(String(255), nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
