"""Tweets: short posts with an optional image."""

from fastapi import UploadFile
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from vidtube.composer import (
    AddFields,
    Count,
    MatchBuilder,
    Page,
    PageRequest,
    SortSpec,
    ViewPipeline,
    ensure_valid_id,
)
from vidtube.exceptions import InvalidArgumentError
from vidtube.models import Comment, ContentType, Like, Tweet, User
from vidtube.services.asset_service import AssetService
from vidtube.services.common import (
    comments_lookup,
    ensure_owner,
    get_or_404,
    like_fields,
    likes_lookup,
    owner_lookup,
)


def _require_content(content: str | None) -> str:
    text = (content or "").strip()
    if len(text) < 3:
        raise InvalidArgumentError("Content must be at least 3 characters long.")
    return text


class TweetService:
    """Service for tweets."""

    @staticmethod
    def create(
        db: Session,
        assets: AssetService,
        actor_id: str,
        content: str,
        image: UploadFile | None = None,
    ) -> Tweet:
        text = _require_content(content)
        image_asset = assets.upload_optional(image, "image")

        tweet = Tweet(
            content=text,
            owner_id=actor_id,
            image_url=image_asset.url if image_asset else None,
            image_asset_id=image_asset.asset_id if image_asset else None,
        )
        db.add(tweet)
        try:
            db.commit()
        except Exception:
            db.rollback()
            assets.discard(image_asset)
            raise
        db.refresh(tweet)
        return tweet

    @staticmethod
    def list_for_user(
        db: Session, user_id: str, actor_id: str | None, page: PageRequest
    ) -> Page:
        """Newest-first tweets of a user with like and comment rollups."""
        get_or_404(db, User, ensure_valid_id(user_id, "User ID"), "User")
        pipeline = ViewPipeline(
            MatchBuilder(Tweet).owned_by(user_id).build(),
            stages=(
                owner_lookup(),
                likes_lookup(ContentType.TWEET),
                comments_lookup(ContentType.TWEET, fields=("id",)),
                like_fields(actor_id),
                AddFields(Count("comments_count", "comments")),
            ),
            sort=SortSpec(),
        )
        return pipeline.paginate(db, page)

    @staticmethod
    def update(
        db: Session,
        assets: AssetService,
        actor_id: str,
        tweet_id: str,
        content: str | None = None,
        image: UploadFile | None = None,
    ) -> Tweet:
        """Replace the content and/or image of the actor's tweet."""
        tweet = get_or_404(db, Tweet, ensure_valid_id(tweet_id, "Tweet ID"), "Tweet")
        ensure_owner(tweet, actor_id, "update", "tweet")

        if content is None and not assets.has_file(image):
            raise InvalidArgumentError("Content or image is required.")
        if content is not None:
            tweet.content = _require_content(content)

        new_image = assets.upload_optional(image, "image")
        old_image_id = None
        if new_image:
            old_image_id = tweet.image_asset_id
            tweet.image_url = new_image.url
            tweet.image_asset_id = new_image.asset_id

        try:
            db.commit()
        except Exception:
            db.rollback()
            assets.discard(new_image)
            raise

        assets.remove(old_image_id, "image")
        db.refresh(tweet)
        return tweet

    @staticmethod
    def delete(db: Session, assets: AssetService, actor_id: str, tweet_id: str) -> None:
        """Delete the actor's tweet, its comments and likes, and its image."""
        tweet = get_or_404(db, Tweet, ensure_valid_id(tweet_id, "Tweet ID"), "Tweet")
        ensure_owner(tweet, actor_id, "delete", "tweet")
        image_asset_id = tweet.image_asset_id

        comment_ids = select(Comment.id).where(
            Comment.parent_type == ContentType.TWEET, Comment.parent_id == tweet.id
        )
        db.execute(
            delete(Like)
            .where(Like.target_type == ContentType.COMMENT, Like.target_id.in_(comment_ids))
            .execution_options(synchronize_session=False)
        )
        db.execute(
            delete(Comment)
            .where(Comment.parent_type == ContentType.TWEET, Comment.parent_id == tweet.id)
            .execution_options(synchronize_session=False)
        )
        db.execute(
            delete(Like)
            .where(Like.target_type == ContentType.TWEET, Like.target_id == tweet.id)
            .execution_options(synchronize_session=False)
        )
        db.delete(tweet)
        db.commit()

        assets.remove(image_asset_id, "image")
