"""Likes router: toggles and the liked-videos list."""

from fastapi import APIRouter

from vidtube.composer import resolve_parent
from vidtube.dependencies import CurrentUser, DbSession, Pagination
from vidtube.schemas import ApiResponse, LikeStatus, PageResponse, VideoCard, respond
from vidtube.services.like_service import LikeService

router = APIRouter(prefix="/likes")


def _toggle(db, current_user, **parent) -> dict:
    liked = LikeService.toggle(db, current_user.id, resolve_parent(**parent))
    message = "Liked successfully" if liked else "Unliked successfully"
    return respond({"liked": liked}, message)


@router.post("/toggle/v/{video_id}", response_model=ApiResponse[LikeStatus])
async def toggle_video_like(video_id: str, db: DbSession, current_user: CurrentUser):
    return _toggle(db, current_user, video_id=video_id)


@router.post("/toggle/c/{comment_id}", response_model=ApiResponse[LikeStatus])
async def toggle_comment_like(comment_id: str, db: DbSession, current_user: CurrentUser):
    return _toggle(db, current_user, comment_id=comment_id)


@router.post("/toggle/t/{tweet_id}", response_model=ApiResponse[LikeStatus])
async def toggle_tweet_like(tweet_id: str, db: DbSession, current_user: CurrentUser):
    return _toggle(db, current_user, tweet_id=tweet_id)


@router.get("/videos", response_model=ApiResponse[PageResponse[VideoCard]])
async def get_liked_videos(db: DbSession, page: Pagination, current_user: CurrentUser):
    """Videos liked by the current user, most recent like first."""
    result = LikeService.liked_videos(db, current_user.id, page)
    return respond(result.to_dict(), "Liked videos fetched successfully")
