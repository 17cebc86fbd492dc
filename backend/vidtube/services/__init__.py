from vidtube.services.asset_service import AssetService
from vidtube.services.auth_service import AuthService
from vidtube.services.comment_service import CommentService
from vidtube.services.dashboard_service import DashboardService
from vidtube.services.like_service import LikeService
from vidtube.services.playlist_service import PlaylistService
from vidtube.services.subscription_service import SubscriptionService
from vidtube.services.tweet_service import TweetService
from vidtube.services.user_service import UserService
from vidtube.services.video_service import VideoService

__all__ = [
    "AssetService",
    "AuthService",
    "CommentService",
    "DashboardService",
    "LikeService",
    "PlaylistService",
    "SubscriptionService",
    "TweetService",
    "UserService",
    "VideoService",
]
