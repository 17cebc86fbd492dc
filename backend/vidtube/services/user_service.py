"""User accounts, channel profiles and watch history."""

from typing import Any, Dict, Tuple

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fastapi import UploadFile

from vidtube.composer import (
    AddFields,
    Contains,
    Count,
    Lookup,
    MatchBuilder,
    Project,
    Through,
    ViewPipeline,
    ensure_valid_id,
)
from vidtube.exceptions import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    UnauthorizedError,
)
from vidtube.logger import auth_logger
from vidtube.models import Subscription, User, Video, WatchHistoryEntry
from vidtube.services.asset_service import AssetService
from vidtube.services.auth_service import AuthService, hash_password, verify_password
from vidtube.services.common import owner_lookup

PROFILE_FIELDS = (
    "id",
    "username",
    "email",
    "full_name",
    "avatar_url",
    "cover_image_url",
    "subscribers_count",
    "channel_subscribed_to_count",
    "is_subscribed",
    "created_at",
)


def _require_text(value: str | None, label: str, min_length: int = 1) -> str:
    text = (value or "").strip()
    if len(text) < min_length:
        if min_length > 1:
            raise InvalidArgumentError(f"{label} must be at least {min_length} characters long.")
        raise InvalidArgumentError(f"{label} is required.")
    return text


class UserService:
    """Service for account lifecycle and user-centric views."""

    @staticmethod
    def register(
        db: Session,
        assets: AssetService,
        username: str,
        email: str,
        full_name: str,
        password: str,
        avatar: UploadFile | None,
        cover_image: UploadFile | None = None,
    ) -> User:
        """
        Create a user after uploading the avatar and optional cover image.

        Uploaded assets are deleted again if the row cannot be written.

        Raises:
            InvalidArgumentError: Missing/short fields or no avatar
            ConflictError: Username or email already taken
        """
        username = _require_text(username, "Username", 3).lower()
        full_name = _require_text(full_name, "Full name", 3)
        email = _require_text(email, "Email").lower()
        password = _require_text(password, "Password")

        taken = db.scalar(
            select(User.id).where(or_(User.username == username, User.email == email))
        )
        if taken:
            raise ConflictError("Username or Email already exists")

        avatar_asset = assets.upload(avatar, "image", label="Avatar image")
        try:
            cover_asset = assets.upload_optional(cover_image, "image")
        except Exception:
            assets.discard(avatar_asset)
            raise

        user = User(
            username=username,
            email=email,
            full_name=full_name,
            password_hash=hash_password(password),
            avatar_url=avatar_asset.url,
            avatar_asset_id=avatar_asset.asset_id,
            cover_image_url=cover_asset.url if cover_asset else None,
            cover_image_asset_id=cover_asset.asset_id if cover_asset else None,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            assets.discard(avatar_asset, cover_asset)
            raise ConflictError("Username or Email already exists")
        except Exception:
            db.rollback()
            assets.discard(avatar_asset, cover_asset)
            raise

        db.refresh(user)
        auth_logger.info(f"Registered user {user.id} ({user.username})")
        return user

    @staticmethod
    def login(
        db: Session,
        auth: AuthService,
        password: str,
        username: str | None = None,
        email: str | None = None,
    ) -> Tuple[User, Dict[str, str]]:
        """
        Authenticate by username or email and issue a fresh token pair.

        The refresh token is stored on the user so that it can be rotated
        and revoked.
        """
        if not username and not email:
            raise InvalidArgumentError("Username or email is required.")

        clauses = []
        if username:
            clauses.append(User.username == username.strip().lower())
        if email:
            clauses.append(User.email == email.strip().lower())
        user = db.scalars(select(User).where(or_(*clauses))).first()
        if not user:
            raise NotFoundError("User does not exist.")

        if not verify_password(password, user.password_hash):
            auth_logger.info(f"Failed login for user {user.id}")
            raise UnauthorizedError("Invalid user credentials.")

        tokens = auth.create_tokens_for_user(user)
        user.refresh_token = tokens["refresh_token"]
        db.commit()
        db.refresh(user)
        return user, tokens

    @staticmethod
    def logout(db: Session, user: User) -> None:
        """Revoke the stored refresh token."""
        user.refresh_token = None
        db.commit()

    @staticmethod
    def refresh(db: Session, auth: AuthService, refresh_token: str | None) -> Dict[str, str]:
        """Exchange the stored refresh token for a new token pair."""
        if not refresh_token:
            raise UnauthorizedError("Refresh token is required.")

        user_id = auth.decode_refresh_token(refresh_token)
        user = db.get(User, user_id)
        if not user:
            raise UnauthorizedError("Invalid refresh token.")
        if user.refresh_token != refresh_token:
            raise UnauthorizedError("Refresh token is expired or used.")

        tokens = auth.create_tokens_for_user(user)
        user.refresh_token = tokens["refresh_token"]
        db.commit()
        return tokens

    @staticmethod
    def change_password(db: Session, user: User, old_password: str, new_password: str) -> None:
        if not verify_password(old_password, user.password_hash):
            raise InvalidArgumentError("Invalid old password.")
        user.password_hash = hash_password(_require_text(new_password, "New password"))
        db.commit()

    @staticmethod
    def update_account(
        db: Session, user: User, full_name: str | None = None, email: str | None = None
    ) -> User:
        """Update full name and/or email."""
        if not full_name and not email:
            raise InvalidArgumentError("Full name or email is required.")

        if full_name:
            user.full_name = _require_text(full_name, "Full name", 3)
        if email:
            email = email.strip().lower()
            taken = db.scalar(select(User.id).where(User.email == email, User.id != user.id))
            if taken:
                raise ConflictError("Email already in use.")
            user.email = email

        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError("Email already in use.")
        db.refresh(user)
        return user

    @staticmethod
    def _replace_image(
        db: Session,
        assets: AssetService,
        user: User,
        upload: UploadFile | None,
        url_attr: str,
        id_attr: str,
        label: str,
    ) -> User:
        new_asset = assets.upload(upload, "image", label=label)
        old_asset_id = getattr(user, id_attr)

        setattr(user, url_attr, new_asset.url)
        setattr(user, id_attr, new_asset.asset_id)
        try:
            db.commit()
        except Exception:
            db.rollback()
            assets.discard(new_asset)
            raise

        # Old asset goes only once the new one is stored
        assets.remove(old_asset_id, "image")
        db.refresh(user)
        return user

    @staticmethod
    def update_avatar(
        db: Session, assets: AssetService, user: User, avatar: UploadFile | None
    ) -> User:
        return UserService._replace_image(
            db, assets, user, avatar, "avatar_url", "avatar_asset_id", "Avatar image"
        )

    @staticmethod
    def update_cover_image(
        db: Session, assets: AssetService, user: User, cover_image: UploadFile | None
    ) -> User:
        return UserService._replace_image(
            db,
            assets,
            user,
            cover_image,
            "cover_image_url",
            "cover_image_asset_id",
            "Cover image",
        )

    @staticmethod
    def channel_profile(db: Session, username: str, actor_id: str | None) -> Dict[str, Any]:
        """
        Channel page of a user with subscription counts.

        Args:
            username: Channel username (case-insensitive)
            actor_id: Viewing user, or None when anonymous

        Raises:
            InvalidArgumentError: Blank username
            NotFoundError: No such channel
        """
        username = _require_text(username, "Username").lower()
        pipeline = ViewPipeline(
            MatchBuilder(User).equals("username", username).build(),
            stages=(
                Lookup(
                    Subscription,
                    local_field="id",
                    as_field="subscribers",
                    foreign_field="channel_id",
                    fields=("subscriber_id",),
                ),
                Lookup(
                    Subscription,
                    local_field="id",
                    as_field="subscribed_to",
                    foreign_field="subscriber_id",
                    fields=("channel_id",),
                ),
                AddFields(
                    Count("subscribers_count", "subscribers"),
                    Count("channel_subscribed_to_count", "subscribed_to"),
                    Contains("is_subscribed", "subscribers", "subscriber_id", actor_id),
                ),
                Project(*PROFILE_FIELDS),
            ),
        )
        profile = pipeline.first(db)
        if profile is None:
            raise NotFoundError("Channel does not exist.")
        return profile

    @staticmethod
    def watch_history(db: Session, user_id: str) -> list[Dict[str, Any]]:
        """Videos the user has opened, in order of first view, with owners."""
        pipeline = ViewPipeline(
            MatchBuilder(User).id_equals("id", user_id, "User ID").build(),
            stages=(
                Lookup(
                    Video,
                    local_field="id",
                    as_field="watch_history",
                    through=Through(
                        WatchHistoryEntry,
                        local_key="user_id",
                        foreign_key="video_id",
                        order_by="watched_at",
                    ),
                    pipeline=(owner_lookup(),),
                ),
                Project("watch_history"),
            ),
        )
        doc = pipeline.first(db)
        if doc is None:
            raise NotFoundError("User not found.")
        return doc["watch_history"]

    @staticmethod
    def get_by_id(db: Session, user_id: str) -> User | None:
        return db.get(User, ensure_valid_id(user_id, "User ID"))
