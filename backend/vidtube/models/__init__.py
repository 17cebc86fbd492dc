from vidtube.models.common import ContentType
from vidtube.models.user import User
from vidtube.models.video import Video
from vidtube.models.comment import Comment
from vidtube.models.like import Like
from vidtube.models.tweet import Tweet
from vidtube.models.playlist import Playlist, PlaylistVideo
from vidtube.models.subscription import Subscription
from vidtube.models.watch_history import WatchHistoryEntry

__all__ = [
    "ContentType",
    "User",
    "Video",
    "Comment",
    "Like",
    "Tweet",
    "Playlist",
    "PlaylistVideo",
    "Subscription",
    "WatchHistoryEntry",
]
