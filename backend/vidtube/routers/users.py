"""Users router: accounts, tokens, profile images and channel pages."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile, status
from pydantic import EmailStr

from vidtube.config import Settings
from vidtube.dependencies import (
    Assets,
    CurrentUser,
    DbSession,
    OptionalUser,
    get_app_settings,
    get_auth_service,
)
from vidtube.schemas import (
    ApiResponse,
    AuthResponse,
    ChangePasswordRequest,
    ChannelProfile,
    Empty,
    LoginRequest,
    RefreshRequest,
    Token,
    UpdateAccountRequest,
    UserResponse,
    VideoCard,
    respond,
)
from vidtube.services.auth_service import AuthService
from vidtube.services.user_service import UserService

router = APIRouter(prefix="/users")

Auth = Annotated[AuthService, Depends(get_auth_service)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]


def _set_token_cookies(response: Response, settings: Settings, tokens: dict) -> None:
    options = {"httponly": True, "secure": settings.is_production, "samesite": "lax"}
    response.set_cookie("accessToken", tokens["access_token"], **options)
    response.set_cookie("refreshToken", tokens["refresh_token"], **options)


@router.post(
    "/register",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    db: DbSession,
    assets: Assets,
    username: Annotated[str, Form()],
    email: Annotated[EmailStr, Form()],
    full_name: Annotated[str, Form(alias="fullName")],
    password: Annotated[str, Form()],
    avatar: Annotated[UploadFile | None, File()] = None,
    cover_image: Annotated[UploadFile | None, File(alias="coverImage")] = None,
):
    """
    Register a user.

    Multipart form with username, email, fullName, password, a required
    avatar image and an optional coverImage.
    """
    user = UserService.register(
        db, assets, username, email, full_name, password, avatar, cover_image
    )
    return respond(user, "User registered successfully", status.HTTP_201_CREATED)


@router.post("/login", response_model=ApiResponse[AuthResponse])
async def login(
    body: LoginRequest,
    response: Response,
    db: DbSession,
    auth: Auth,
    settings: AppSettings,
):
    """Log in by username or email; tokens are returned and set as cookies."""
    user, tokens = UserService.login(
        db, auth, body.password, username=body.username, email=body.email
    )
    _set_token_cookies(response, settings, tokens)
    return respond({**tokens, "user": user}, "User logged in successfully")


@router.post("/logout", response_model=ApiResponse[Empty])
async def logout(response: Response, db: DbSession, current_user: CurrentUser):
    UserService.logout(db, current_user)
    response.delete_cookie("accessToken")
    response.delete_cookie("refreshToken")
    return respond({}, "User logged out successfully")


@router.post("/refresh-token", response_model=ApiResponse[Token])
async def refresh_token(
    request: Request,
    response: Response,
    db: DbSession,
    auth: Auth,
    settings: AppSettings,
    body: RefreshRequest | None = None,
):
    """Rotate the token pair using the refresh token (body or cookie)."""
    token = (body.refresh_token if body else None) or request.cookies.get("refreshToken")
    tokens = UserService.refresh(db, auth, token)
    _set_token_cookies(response, settings, tokens)
    return respond(tokens, "Access token refreshed")


@router.post("/change-password", response_model=ApiResponse[Empty])
async def change_password(
    body: ChangePasswordRequest, db: DbSession, current_user: CurrentUser
):
    UserService.change_password(db, current_user, body.old_password, body.new_password)
    return respond({}, "Password changed successfully")


@router.get("/current-user", response_model=ApiResponse[UserResponse])
async def get_current_user_details(current_user: CurrentUser):
    return respond(current_user, "Current user fetched successfully")


@router.patch("/update-account", response_model=ApiResponse[UserResponse])
async def update_account(
    body: UpdateAccountRequest, db: DbSession, current_user: CurrentUser
):
    user = UserService.update_account(
        db, current_user, full_name=body.full_name, email=body.email
    )
    return respond(user, "Account details updated successfully")


@router.patch("/avatar", response_model=ApiResponse[UserResponse])
async def update_avatar(
    db: DbSession,
    assets: Assets,
    current_user: CurrentUser,
    avatar: Annotated[UploadFile | None, File()] = None,
):
    user = UserService.update_avatar(db, assets, current_user, avatar)
    return respond(user, "Avatar updated successfully")


@router.patch("/cover-image", response_model=ApiResponse[UserResponse])
async def update_cover_image(
    db: DbSession,
    assets: Assets,
    current_user: CurrentUser,
    cover_image: Annotated[UploadFile | None, File(alias="coverImage")] = None,
):
    user = UserService.update_cover_image(db, assets, current_user, cover_image)
    return respond(user, "Cover image updated successfully")


@router.get("/channel/{username}", response_model=ApiResponse[ChannelProfile])
async def get_channel_profile(username: str, db: DbSession, actor: OptionalUser):
    """Channel page with subscriber counts; isSubscribed is relative to the caller."""
    profile = UserService.channel_profile(db, username, actor.id if actor else None)
    return respond(profile, "Channel profile fetched successfully")


@router.get("/watch-history", response_model=ApiResponse[list[VideoCard]])
async def get_watch_history(db: DbSession, current_user: CurrentUser):
    history = UserService.watch_history(db, current_user.id)
    return respond(history, "Watch history fetched successfully")
