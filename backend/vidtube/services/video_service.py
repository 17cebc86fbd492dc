"""Video feed, detail, publishing and lifecycle."""

from typing import Any, Dict

from fastapi import UploadFile
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vidtube.composer import (
    AddFields,
    Contains,
    Count,
    Lookup,
    MatchBuilder,
    Page,
    PageRequest,
    SortSpec,
    ViewPipeline,
    ensure_valid_id,
)
from vidtube.exceptions import InvalidArgumentError, NotFoundError
from vidtube.logger import api_logger
from vidtube.models import (
    Comment,
    ContentType,
    Like,
    PlaylistVideo,
    Subscription,
    Video,
    WatchHistoryEntry,
)
from vidtube.services.asset_service import AssetService
from vidtube.services.common import (
    comments_lookup,
    ensure_owner,
    like_fields,
    likes_lookup,
    owner_lookup,
)

FEED_SORTS = {
    "created_at": "created_at",
    "views": "views",
    "duration": "duration",
    "title": "title",
}


def _require_text(value: str | None, label: str) -> str:
    text = (value or "").strip()
    if len(text) < 3:
        raise InvalidArgumentError(f"{label} must be at least 3 characters long.")
    return text


def _load_video(db: Session, video_id: str) -> Video:
    video = db.get(Video, ensure_valid_id(video_id, "Video ID"))
    if video is None:
        raise NotFoundError("Video not found.")
    return video


class VideoService:
    """Service for videos and their derived views."""

    @staticmethod
    def feed(
        db: Session,
        page: PageRequest,
        query: str | None = None,
        owner_id: str | None = None,
        sort_by: str | None = None,
        sort_type: str | None = None,
    ) -> Page:
        """
        Published videos, optionally searched and/or restricted to one owner.

        Args:
            query: Free-text search over title and description
            owner_id: Restrict to one channel
            sort_by: createdAt, views, duration or title
            sort_type: asc or desc
        """
        match = (
            MatchBuilder(Video)
            .published()
            .search(query)
            .owned_by(owner_id)
            .build()
        )
        pipeline = ViewPipeline(
            match,
            stages=(owner_lookup(),),
            sort=SortSpec.parse(sort_by, sort_type, FEED_SORTS),
        )
        return pipeline.paginate(db, page)

    @staticmethod
    def detail_pipeline(video_id: str, actor_id: str | None) -> ViewPipeline:
        """Video with owner subscription info, like rollup and comments."""
        owner_stages = (
            Lookup(
                Subscription,
                local_field="id",
                as_field="subscribers",
                foreign_field="channel_id",
                fields=("subscriber_id",),
            ),
            AddFields(
                Count("subscribers_count", "subscribers"),
                Contains("is_subscribed", "subscribers", "subscriber_id", actor_id),
            ),
        )
        return ViewPipeline(
            MatchBuilder(Video).id_equals("id", video_id, "Video ID").build(),
            stages=(
                owner_lookup(
                    pipeline=owner_stages,
                    extra_fields=("subscribers_count", "is_subscribed"),
                ),
                likes_lookup(ContentType.VIDEO),
                comments_lookup(
                    ContentType.VIDEO,
                    order_by=(("created_at", True), ("id", True)),
                    pipeline=(owner_lookup(),),
                ),
                like_fields(actor_id),
                AddFields(Count("comments_count", "comments")),
            ),
        )

    @staticmethod
    def detail(db: Session, video_id: str, actor_id: str | None) -> Dict[str, Any]:
        """
        Video detail page.

        Unpublished videos are visible to their owner only. Opening the page
        counts a view and, for signed-in actors, appends the video to their
        watch history; neither side effect can fail the read.

        Raises:
            InvalidArgumentError: Malformed video id
            NotFoundError: Missing video, or unpublished and not the owner's
        """
        video = _load_video(db, video_id)
        if not video.is_published and video.owner_id != actor_id:
            raise NotFoundError("Video not found.")

        VideoService.record_view(db, video.id, actor_id)
        return VideoService.detail_pipeline(video.id, actor_id).first(db)

    @staticmethod
    def record_view(db: Session, video_id: str, actor_id: str | None) -> None:
        """Atomically bump the view counter and record watch history."""
        try:
            db.execute(
                update(Video)
                .where(Video.id == video_id)
                .values(views=Video.views + 1)
                .execution_options(synchronize_session=False)
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            api_logger.warning(f"Failed to record view for video {video_id}: {e}")

        if actor_id is None:
            return

        try:
            seen = db.scalar(
                select(WatchHistoryEntry.id).where(
                    WatchHistoryEntry.user_id == actor_id,
                    WatchHistoryEntry.video_id == video_id,
                )
            )
            if seen is None:
                db.add(WatchHistoryEntry(user_id=actor_id, video_id=video_id))
                db.commit()
        except SQLAlchemyError as e:
            # A concurrent first view may win the unique index
            db.rollback()
            api_logger.warning(
                f"Failed to record watch history for user {actor_id}, video {video_id}: {e}"
            )

    @staticmethod
    def publish(
        db: Session,
        assets: AssetService,
        owner_id: str,
        title: str,
        description: str,
        video_file: UploadFile | None,
        thumbnail: UploadFile | None,
    ) -> Video:
        """
        Upload a video and its thumbnail and create the row.

        Uploaded assets are deleted again if the row cannot be written.
        """
        title = _require_text(title, "Title")
        description = _require_text(description, "Description")
        if not assets.has_file(video_file):
            raise InvalidArgumentError("Video file is required.")
        if not assets.has_file(thumbnail):
            raise InvalidArgumentError("Thumbnail is required.")

        video_asset = assets.upload(video_file, "video", label="Video file")
        try:
            thumbnail_asset = assets.upload(thumbnail, "image", label="Thumbnail")
        except Exception:
            assets.discard(video_asset)
            raise

        video = Video(
            owner_id=owner_id,
            title=title,
            description=description,
            video_url=video_asset.url,
            video_asset_id=video_asset.asset_id,
            thumbnail_url=thumbnail_asset.url,
            thumbnail_asset_id=thumbnail_asset.asset_id,
            duration=video_asset.duration or 0,
        )
        db.add(video)
        try:
            db.commit()
        except Exception:
            db.rollback()
            assets.discard(video_asset, thumbnail_asset)
            raise

        db.refresh(video)
        api_logger.info(f"User {owner_id} published video {video.id}")
        return video

    @staticmethod
    def update(
        db: Session,
        assets: AssetService,
        actor_id: str,
        video_id: str,
        title: str | None = None,
        description: str | None = None,
        thumbnail: UploadFile | None = None,
    ) -> Video:
        """Update title, description and/or thumbnail of the actor's video."""
        video = _load_video(db, video_id)
        ensure_owner(video, actor_id, "update", "video")

        if title is None and description is None and not assets.has_file(thumbnail):
            raise InvalidArgumentError("Nothing to update.")

        if title is not None:
            video.title = _require_text(title, "Title")
        if description is not None:
            video.description = _require_text(description, "Description")

        new_thumbnail = assets.upload_optional(thumbnail, "image")
        old_thumbnail_id = None
        if new_thumbnail:
            old_thumbnail_id = video.thumbnail_asset_id
            video.thumbnail_url = new_thumbnail.url
            video.thumbnail_asset_id = new_thumbnail.asset_id

        try:
            db.commit()
        except Exception:
            db.rollback()
            assets.discard(new_thumbnail)
            raise

        assets.remove(old_thumbnail_id, "image")
        db.refresh(video)
        return video

    @staticmethod
    def delete(db: Session, assets: AssetService, actor_id: str, video_id: str) -> None:
        """
        Delete the actor's video with its likes, comments, comment likes,
        playlist entries and watch history, then its two hosted assets.
        """
        video = _load_video(db, video_id)
        ensure_owner(video, actor_id, "delete", "video")

        video_asset_id = video.video_asset_id
        thumbnail_asset_id = video.thumbnail_asset_id

        comment_ids = select(Comment.id).where(
            Comment.parent_type == ContentType.VIDEO, Comment.parent_id == video.id
        )
        db.execute(
            delete(Like)
            .where(Like.target_type == ContentType.COMMENT, Like.target_id.in_(comment_ids))
            .execution_options(synchronize_session=False)
        )
        db.execute(
            delete(Comment)
            .where(Comment.parent_type == ContentType.VIDEO, Comment.parent_id == video.id)
            .execution_options(synchronize_session=False)
        )
        db.execute(
            delete(Like)
            .where(Like.target_type == ContentType.VIDEO, Like.target_id == video.id)
            .execution_options(synchronize_session=False)
        )
        db.execute(
            delete(PlaylistVideo)
            .where(PlaylistVideo.video_id == video.id)
            .execution_options(synchronize_session=False)
        )
        db.execute(
            delete(WatchHistoryEntry)
            .where(WatchHistoryEntry.video_id == video.id)
            .execution_options(synchronize_session=False)
        )
        db.delete(video)
        db.commit()

        assets.remove(video_asset_id, "video")
        assets.remove(thumbnail_asset_id, "image")
        api_logger.info(f"User {actor_id} deleted video {video_id}")

    @staticmethod
    def toggle_publish(db: Session, actor_id: str, video_id: str) -> Video:
        """Flip the publication flag of the actor's video."""
        video = _load_video(db, video_id)
        ensure_owner(video, actor_id, "update", "video")

        video.is_published = not video.is_published
        db.commit()
        db.refresh(video)
        return video
