"""Playlists: ordered sets of videos."""

from typing import Any, Dict

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vidtube.composer import (
    AddFields,
    Count,
    Lookup,
    MatchBuilder,
    Page,
    PageRequest,
    SortSpec,
    Sum,
    Through,
    ViewPipeline,
    ensure_valid_id,
)
from vidtube.exceptions import InvalidArgumentError, NotFoundError
from vidtube.logger import api_logger
from vidtube.models import Playlist, PlaylistVideo, User, Video
from vidtube.services.common import ensure_owner, get_or_404, owner_lookup


def _require_text(value: str | None, label: str) -> str:
    text = (value or "").strip()
    if not text:
        raise InvalidArgumentError(f"Playlist {label} is required.")
    return text


def _videos_lookup() -> Lookup:
    return Lookup(
        Video,
        local_field="id",
        as_field="videos",
        through=Through(
            PlaylistVideo,
            local_key="playlist_id",
            foreign_key="video_id",
            order_by="position",
        ),
        pipeline=(owner_lookup(),),
    )


def _load_playlist(db: Session, playlist_id: str) -> Playlist:
    return get_or_404(db, Playlist, ensure_valid_id(playlist_id, "Playlist ID"), "Playlist")


class PlaylistService:
    """Service for playlists and their video membership."""

    @staticmethod
    def create(db: Session, actor_id: str, name: str, description: str) -> Playlist:
        playlist = Playlist(
            owner_id=actor_id,
            name=_require_text(name, "name"),
            description=_require_text(description, "description"),
        )
        db.add(playlist)
        db.commit()
        db.refresh(playlist)
        return playlist

    @staticmethod
    def list_for_user(db: Session, user_id: str, page: PageRequest) -> Page:
        """Newest-first playlists of a user with their videos."""
        get_or_404(db, User, ensure_valid_id(user_id, "User ID"), "User")
        pipeline = ViewPipeline(
            MatchBuilder(Playlist).owned_by(user_id).build(),
            stages=(
                owner_lookup(),
                _videos_lookup(),
                AddFields(Count("video_count", "videos")),
            ),
            sort=SortSpec(),
        )
        return pipeline.paginate(db, page)

    @staticmethod
    def detail(db: Session, playlist_id: str) -> Dict[str, Any]:
        """Playlist with ordered videos, video_count and total_views."""
        pipeline = ViewPipeline(
            MatchBuilder(Playlist).id_equals("id", playlist_id, "Playlist ID").build(),
            stages=(
                owner_lookup(),
                _videos_lookup(),
                AddFields(
                    Count("video_count", "videos"),
                    Sum("total_views", "videos", "views"),
                ),
            ),
        )
        playlist = pipeline.first(db)
        if playlist is None:
            raise NotFoundError("Playlist not found.")
        return playlist

    @staticmethod
    def add_video(db: Session, actor_id: str, playlist_id: str, video_id: str) -> Dict[str, Any]:
        """
        Append a video to the actor's playlist.

        Adding a video that is already in the playlist is a no-op.
        """
        playlist = _load_playlist(db, playlist_id)
        ensure_owner(playlist, actor_id, "add videos to", "playlist")
        video = get_or_404(db, Video, ensure_valid_id(video_id, "Video ID"), "Video")

        present = db.scalar(
            select(PlaylistVideo.id).where(
                PlaylistVideo.playlist_id == playlist.id,
                PlaylistVideo.video_id == video.id,
            )
        )
        if present is None:
            last = db.scalar(
                select(func.max(PlaylistVideo.position)).where(
                    PlaylistVideo.playlist_id == playlist.id
                )
            )
            db.add(
                PlaylistVideo(
                    playlist_id=playlist.id,
                    video_id=video.id,
                    position=0 if last is None else last + 1,
                )
            )
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                api_logger.debug(f"Video {video.id} already in playlist {playlist.id}")

        return PlaylistService.detail(db, playlist_id)

    @staticmethod
    def remove_video(
        db: Session, actor_id: str, playlist_id: str, video_id: str
    ) -> Dict[str, Any]:
        playlist = _load_playlist(db, playlist_id)
        ensure_owner(playlist, actor_id, "remove videos from", "playlist")
        video_id = ensure_valid_id(video_id, "Video ID")

        db.execute(
            delete(PlaylistVideo)
            .where(PlaylistVideo.playlist_id == playlist.id, PlaylistVideo.video_id == video_id)
            .execution_options(synchronize_session=False)
        )
        db.commit()
        return PlaylistService.detail(db, playlist_id)

    @staticmethod
    def update(
        db: Session,
        actor_id: str,
        playlist_id: str,
        name: str | None = None,
        description: str | None = None,
    ) -> Playlist:
        playlist = _load_playlist(db, playlist_id)
        ensure_owner(playlist, actor_id, "update", "playlist")

        if name is None and description is None:
            raise InvalidArgumentError("Playlist name or description is required.")
        if name is not None:
            playlist.name = _require_text(name, "name")
        if description is not None:
            playlist.description = _require_text(description, "description")

        db.commit()
        db.refresh(playlist)
        return playlist

    @staticmethod
    def delete(db: Session, actor_id: str, playlist_id: str) -> None:
        playlist = _load_playlist(db, playlist_id)
        ensure_owner(playlist, actor_id, "delete", "playlist")
        db.delete(playlist)
        db.commit()
