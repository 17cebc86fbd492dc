"""Playlists router."""

from fastapi import APIRouter, status

from vidtube.dependencies import CurrentUser, DbSession, Pagination
from vidtube.schemas import (
    ApiResponse,
    Empty,
    PageResponse,
    PlaylistCreate,
    PlaylistDetail,
    PlaylistResponse,
    PlaylistUpdate,
    PlaylistView,
    respond,
)
from vidtube.services.playlist_service import PlaylistService

router = APIRouter(prefix="/playlists")


@router.post(
    "/", response_model=ApiResponse[PlaylistResponse], status_code=status.HTTP_201_CREATED
)
async def create_playlist(body: PlaylistCreate, db: DbSession, current_user: CurrentUser):
    playlist = PlaylistService.create(db, current_user.id, body.name, body.description)
    return respond(playlist, "Playlist created successfully", status.HTTP_201_CREATED)


@router.get("/user/{user_id}", response_model=ApiResponse[PageResponse[PlaylistView]])
async def get_user_playlists(user_id: str, db: DbSession, page: Pagination):
    result = PlaylistService.list_for_user(db, user_id, page)
    return respond(result.to_dict(), "User playlists fetched successfully")


@router.get("/{playlist_id}", response_model=ApiResponse[PlaylistDetail])
async def get_playlist(playlist_id: str, db: DbSession):
    """Playlist with its videos in playlist order."""
    playlist = PlaylistService.detail(db, playlist_id)
    return respond(playlist, "Playlist fetched successfully")


@router.patch("/add/{video_id}/{playlist_id}", response_model=ApiResponse[PlaylistDetail])
async def add_video_to_playlist(
    video_id: str, playlist_id: str, db: DbSession, current_user: CurrentUser
):
    playlist = PlaylistService.add_video(db, current_user.id, playlist_id, video_id)
    return respond(playlist, "Video added to playlist successfully")


@router.patch("/remove/{video_id}/{playlist_id}", response_model=ApiResponse[PlaylistDetail])
async def remove_video_from_playlist(
    video_id: str, playlist_id: str, db: DbSession, current_user: CurrentUser
):
    playlist = PlaylistService.remove_video(db, current_user.id, playlist_id, video_id)
    return respond(playlist, "Video removed from playlist successfully")


@router.patch("/{playlist_id}", response_model=ApiResponse[PlaylistResponse])
async def update_playlist(
    playlist_id: str, body: PlaylistUpdate, db: DbSession, current_user: CurrentUser
):
    playlist = PlaylistService.update(
        db, current_user.id, playlist_id, name=body.name, description=body.description
    )
    return respond(playlist, "Playlist updated successfully")


@router.delete("/{playlist_id}", response_model=ApiResponse[Empty])
async def delete_playlist(playlist_id: str, db: DbSession, current_user: CurrentUser):
    PlaylistService.delete(db, current_user.id, playlist_id)
    return respond({}, "Playlist deleted successfully")
