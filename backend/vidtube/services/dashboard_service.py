"""Channel dashboard: cached stats and the owner's video list."""

from typing import Any, Dict

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from vidtube.composer import (
    AddFields,
    Count,
    MatchBuilder,
    Page,
    PageRequest,
    SortSpec,
    ViewPipeline,
)
from vidtube.logger import redis_logger
from vidtube.models import ContentType, Like, Subscription, Video
from vidtube.redis_client import RedisClient
from vidtube.services.common import comments_lookup, likes_lookup

DASHBOARD_SORTS = {
    "created_at": "created_at",
    "views": "views",
    "title": "title",
    "duration": "duration",
}


def stats_cache_key(user_id: str) -> str:
    return f"channel_stats:{user_id}"


class DashboardService:
    """Service for channel statistics."""

    @staticmethod
    def get_stats(
        db: Session, cache: RedisClient, user_id: str, ttl: int = 300
    ) -> Dict[str, int]:
        """
        Totals for the channel of user_id.

        Served from Redis when cached; computed and cached for ttl seconds
        otherwise. Without Redis every call computes.
        """
        cache_key = stats_cache_key(user_id)
        cached = cache.get_json(cache_key)
        if cached is not None:
            redis_logger.debug(f"Stats cache hit for user {user_id}")
            return cached

        video_ids = select(Video.id).where(Video.owner_id == user_id)
        total_videos, total_views = db.execute(
            select(func.count(Video.id), func.coalesce(func.sum(Video.views), 0)).where(
                Video.owner_id == user_id
            )
        ).one()
        total_subscribers = db.scalar(
            select(func.count()).select_from(Subscription).where(
                Subscription.channel_id == user_id
            )
        )
        total_likes = db.scalar(
            select(func.count()).select_from(Like).where(
                Like.target_type == ContentType.VIDEO, Like.target_id.in_(video_ids)
            )
        )

        stats = {
            "total_videos": total_videos or 0,
            "total_views": int(total_views or 0),
            "total_subscribers": total_subscribers or 0,
            "total_likes": total_likes or 0,
        }
        cache.set_json(cache_key, stats, expire=ttl)
        return stats

    @staticmethod
    def invalidate_stats(cache: RedisClient, user_id: str) -> None:
        """Drop cached stats after the channel's videos change."""
        if cache.delete(stats_cache_key(user_id)):
            redis_logger.debug(f"Invalidated stats cache for user {user_id}")

    @staticmethod
    def list_videos(
        db: Session,
        user_id: str,
        page: PageRequest,
        sort_by: str | None = None,
        sort_type: str | None = None,
    ) -> Page:
        """All of the owner's videos (published or not) with engagement counts."""
        pipeline = ViewPipeline(
            MatchBuilder(Video).owned_by(user_id).published(None).build(),
            stages=(
                likes_lookup(ContentType.VIDEO),
                comments_lookup(ContentType.VIDEO, fields=("id",)),
                AddFields(
                    Count("likes_count", "likes"),
                    Count("comments_count", "comments"),
                ),
            ),
            sort=SortSpec.parse(sort_by, sort_type, DASHBOARD_SORTS),
        )
        return pipeline.paginate(db, page)
