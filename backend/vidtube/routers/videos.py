"""Videos router for the public feed, video pages and publishing."""

from typing import Annotated

from fastapi import APIRouter, File, Form, Query, Request, UploadFile, status

from vidtube.dependencies import Assets, CurrentUser, DbSession, OptionalUser, Pagination
from vidtube.schemas import (
    ApiResponse,
    Empty,
    PageResponse,
    VideoCard,
    VideoDetail,
    respond,
)
from vidtube.services.dashboard_service import DashboardService
from vidtube.services.video_service import VideoService

router = APIRouter(prefix="/videos")


@router.get("/", response_model=ApiResponse[PageResponse[VideoCard]])
async def get_all_videos(
    db: DbSession,
    page: Pagination,
    query: str | None = Query(None, description="Search in title and description"),
    sort_by: str | None = Query(None, alias="sortBy", description="Sort field"),
    sort_type: str | None = Query(None, alias="sortType", description="asc or desc"),
    user_id: str | None = Query(None, alias="userId", description="Only this channel"),
):
    """
    Published videos with search, sorting and pagination.

    Supports:
    - Searching title and description (every term must match)
    - Sorting by createdAt, views, duration or title
    - Restricting to one channel
    """
    result = VideoService.feed(
        db, page, query=query, owner_id=user_id, sort_by=sort_by, sort_type=sort_type
    )
    return respond(result.to_dict(), "Videos fetched successfully")


@router.post(
    "/",
    response_model=ApiResponse[VideoCard],
    status_code=status.HTTP_201_CREATED,
)
async def publish_video(
    request: Request,
    db: DbSession,
    assets: Assets,
    current_user: CurrentUser,
    title: Annotated[str, Form()],
    description: Annotated[str, Form()],
    video_file: Annotated[UploadFile | None, File(alias="videoFile")] = None,
    thumbnail: Annotated[UploadFile | None, File()] = None,
):
    """Upload a video file and thumbnail and publish them."""
    video = VideoService.publish(
        db, assets, current_user.id, title, description, video_file, thumbnail
    )
    DashboardService.invalidate_stats(request.app.state.cache, current_user.id)
    return respond(video, "Video published successfully", status.HTTP_201_CREATED)


@router.get("/{video_id}", response_model=ApiResponse[VideoDetail])
async def get_video(video_id: str, db: DbSession, actor: OptionalUser):
    """
    Video page with owner, subscription, like and comment details.

    Opening the page counts a view and updates the caller's watch history.
    """
    video = VideoService.detail(db, video_id, actor.id if actor else None)
    return respond(video, "Video fetched successfully")


@router.patch("/{video_id}", response_model=ApiResponse[VideoCard])
async def update_video(
    video_id: str,
    db: DbSession,
    assets: Assets,
    current_user: CurrentUser,
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    thumbnail: Annotated[UploadFile | None, File()] = None,
):
    video = VideoService.update(
        db,
        assets,
        current_user.id,
        video_id,
        title=title,
        description=description,
        thumbnail=thumbnail,
    )
    return respond(video, "Video updated successfully")


@router.delete("/{video_id}", response_model=ApiResponse[Empty])
async def delete_video(
    video_id: str,
    request: Request,
    db: DbSession,
    assets: Assets,
    current_user: CurrentUser,
):
    VideoService.delete(db, assets, current_user.id, video_id)
    DashboardService.invalidate_stats(request.app.state.cache, current_user.id)
    return respond({}, "Video deleted successfully")


@router.patch("/toggle/publish/{video_id}", response_model=ApiResponse[VideoCard])
async def toggle_publish_status(
    video_id: str,
    request: Request,
    db: DbSession,
    current_user: CurrentUser,
):
    video = VideoService.toggle_publish(db, current_user.id, video_id)
    DashboardService.invalidate_stats(request.app.state.cache, current_user.id)
    message = "Video published" if video.is_published else "Video unpublished"
    return respond(video, message)
