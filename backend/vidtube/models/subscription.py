from sqlalchemy import Column, String, DateTime, ForeignKey, Index

from vidtube.database import Base
from vidtube.models.common import new_id, utcnow


class Subscription(Base):
    """Directed edge: subscriber follows channel. The row is the subscribed state."""

    __tablename__ = "subscriptions"

    id = Column(String(32), primary_key=True, default=new_id)
    subscriber_id = Column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    channel_id = Column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    created_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_subscription_pair", "subscriber_id", "channel_id", unique=True),
    )
