from sqlalchemy import Column, String, DateTime, ForeignKey, Index

from vidtube.database import Base
from vidtube.models.common import content_type_column_type, new_id, utcnow


class Like(Base):
    """A user's like on a video, comment or tweet. The row is the liked state."""

    __tablename__ = "likes"

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    target_type = Column(content_type_column_type(), nullable=False)
    target_id = Column(String(32), nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    # One like per (target, user)
    __table_args__ = (
        Index("idx_like_target_user", "target_type", "target_id", "user_id", unique=True),
    )
