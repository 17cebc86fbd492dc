"""Dashboard router for the current user's channel."""

from fastapi import APIRouter, Query, Request

from vidtube.dependencies import CurrentUser, DbSession, Pagination
from vidtube.schemas import ApiResponse, ChannelStats, DashboardVideo, PageResponse, respond
from vidtube.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard")


@router.get("/stats", response_model=ApiResponse[ChannelStats])
async def get_channel_stats(request: Request, db: DbSession, current_user: CurrentUser):
    """
    Channel totals: videos, views, subscribers and likes on videos.

    Cached in Redis per user; publishing, deleting or toggling a video
    invalidates the entry.
    """
    settings = request.app.state.settings
    stats = DashboardService.get_stats(
        db, request.app.state.cache, current_user.id, ttl=settings.stats_cache_ttl
    )
    return respond(stats, "Channel stats fetched successfully")


@router.get("/videos", response_model=ApiResponse[PageResponse[DashboardVideo]])
async def get_channel_videos(
    db: DbSession,
    page: Pagination,
    current_user: CurrentUser,
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_type: str | None = Query(None, alias="sortType"),
):
    result = DashboardService.list_videos(
        db, current_user.id, page, sort_by=sort_by, sort_type=sort_type
    )
    return respond(result.to_dict(), "Channel videos fetched successfully")
