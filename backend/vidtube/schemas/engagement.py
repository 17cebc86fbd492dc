"""Toggle results and dashboard stats."""

from vidtube.schemas.common import CamelModel


class LikeStatus(CamelModel):
    liked: bool


class SubscriptionStatus(CamelModel):
    subscribed: bool


class ChannelStats(CamelModel):
    """Aggregate numbers for the channel dashboard."""

    total_videos: int = 0
    total_views: int = 0
    total_subscribers: int = 0
    total_likes: int = 0
