from vidtube.schemas.common import ApiResponse, CamelModel, Empty, PageResponse, respond
from vidtube.schemas.auth import AuthResponse, LoginRequest, RefreshRequest, Token
from vidtube.schemas.user import (
    ChangePasswordRequest,
    ChannelProfile,
    OwnerSummary,
    UpdateAccountRequest,
    UserResponse,
    VideoOwner,
)
from vidtube.schemas.comment import CommentCreate, CommentUpdate, CommentView
from vidtube.schemas.video import DashboardVideo, VideoCard, VideoDetail
from vidtube.schemas.tweet import TweetView
from vidtube.schemas.playlist import (
    PlaylistCreate,
    PlaylistDetail,
    PlaylistResponse,
    PlaylistUpdate,
    PlaylistView,
)
from vidtube.schemas.engagement import ChannelStats, LikeStatus, SubscriptionStatus

__all__ = [
    "ApiResponse",
    "CamelModel",
    "Empty",
    "PageResponse",
    "respond",
    "AuthResponse",
    "LoginRequest",
    "RefreshRequest",
    "Token",
    "ChangePasswordRequest",
    "ChannelProfile",
    "OwnerSummary",
    "UpdateAccountRequest",
    "UserResponse",
    "VideoOwner",
    "CommentCreate",
    "CommentUpdate",
    "CommentView",
    "DashboardVideo",
    "VideoCard",
    "VideoDetail",
    "TweetView",
    "PlaylistCreate",
    "PlaylistDetail",
    "PlaylistResponse",
    "PlaylistUpdate",
    "PlaylistView",
    "ChannelStats",
    "LikeStatus",
    "SubscriptionStatus",
]
