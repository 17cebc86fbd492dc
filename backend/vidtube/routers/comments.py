"""Comments router for video and tweet threads."""

from fastapi import APIRouter, status

from vidtube.composer import resolve_parent
from vidtube.dependencies import CurrentUser, DbSession, OptionalUser, Pagination
from vidtube.models import ContentType
from vidtube.schemas import (
    ApiResponse,
    CommentCreate,
    CommentUpdate,
    CommentView,
    Empty,
    PageResponse,
    respond,
)
from vidtube.services.comment_service import CommentService

router = APIRouter(prefix="/comments")

PARENT_KINDS = (ContentType.VIDEO, ContentType.TWEET)


@router.get("/video/{video_id}", response_model=ApiResponse[PageResponse[CommentView]])
async def get_video_comments(
    video_id: str, db: DbSession, page: Pagination, actor: OptionalUser
):
    parent = resolve_parent(video_id=video_id, allowed=PARENT_KINDS)
    result = CommentService.list_for(db, parent, actor.id if actor else None, page)
    return respond(result.to_dict(), "Comments fetched successfully")


@router.get("/tweet/{tweet_id}", response_model=ApiResponse[PageResponse[CommentView]])
async def get_tweet_comments(
    tweet_id: str, db: DbSession, page: Pagination, actor: OptionalUser
):
    parent = resolve_parent(tweet_id=tweet_id, allowed=PARENT_KINDS)
    result = CommentService.list_for(db, parent, actor.id if actor else None, page)
    return respond(result.to_dict(), "Comments fetched successfully")


@router.post(
    "/video/{video_id}",
    response_model=ApiResponse[CommentView],
    status_code=status.HTTP_201_CREATED,
)
async def add_video_comment(
    video_id: str, body: CommentCreate, db: DbSession, current_user: CurrentUser
):
    parent = resolve_parent(video_id=video_id, allowed=PARENT_KINDS)
    comment = CommentService.add(db, current_user.id, parent, body.content)
    return respond(comment, "Comment added successfully", status.HTTP_201_CREATED)


@router.post(
    "/tweet/{tweet_id}",
    response_model=ApiResponse[CommentView],
    status_code=status.HTTP_201_CREATED,
)
async def add_tweet_comment(
    tweet_id: str, body: CommentCreate, db: DbSession, current_user: CurrentUser
):
    parent = resolve_parent(tweet_id=tweet_id, allowed=PARENT_KINDS)
    comment = CommentService.add(db, current_user.id, parent, body.content)
    return respond(comment, "Comment added successfully", status.HTTP_201_CREATED)


@router.patch("/{comment_id}", response_model=ApiResponse[CommentView])
async def update_comment(
    comment_id: str, body: CommentUpdate, db: DbSession, current_user: CurrentUser
):
    comment = CommentService.update(db, current_user.id, comment_id, body.content)
    return respond(comment, "Comment updated successfully")


@router.delete("/{comment_id}", response_model=ApiResponse[Empty])
async def delete_comment(comment_id: str, db: DbSession, current_user: CurrentUser):
    CommentService.delete(db, current_user.id, comment_id)
    return respond({}, "Comment deleted successfully")
