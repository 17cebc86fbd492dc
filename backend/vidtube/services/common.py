"""Shared lookups and guards used by the resource services."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from vidtube.composer import AddFields, Contains, Count, Lookup
from vidtube.composer.match import ParentRef
from vidtube.exceptions import ForbiddenError, NotFoundError
from vidtube.models import Comment, ContentType, Like, Tweet, User, Video

OWNER_FIELDS = ("id", "username", "full_name", "avatar_url")

CONTENT_MODELS = {
    ContentType.VIDEO: Video,
    ContentType.COMMENT: Comment,
    ContentType.TWEET: Tweet,
}


def owner_lookup(
    local_field: str = "owner_id",
    as_field: str = "owner",
    pipeline: tuple = (),
    extra_fields: tuple[str, ...] = (),
) -> Lookup:
    """Embed the public summary of a user as a single object."""
    return Lookup(
        User,
        local_field=local_field,
        as_field=as_field,
        fields=OWNER_FIELDS + extra_fields,
        pipeline=pipeline,
        first=True,
    )


def likes_lookup(kind: ContentType) -> Lookup:
    """Embed the likes of each document (user ids only)."""
    return Lookup(
        Like,
        local_field="id",
        as_field="likes",
        foreign_field="target_id",
        where={"target_type": kind},
        fields=("user_id",),
    )


def comments_lookup(kind: ContentType, **kwargs) -> Lookup:
    """Embed the comments whose parent is each document."""
    return Lookup(
        Comment,
        local_field="id",
        as_field="comments",
        foreign_field="parent_id",
        where={"parent_type": kind},
        **kwargs,
    )


def like_fields(actor_id: str | None) -> AddFields:
    """likes_count and is_liked from an embedded likes array."""
    return AddFields(
        Count("likes_count", "likes"),
        Contains("is_liked", "likes", "user_id", actor_id),
    )


def get_or_404(db: Session, model, entity_id: str, label: str):
    """Load a row by primary key or raise NotFoundError."""
    instance = db.get(model, entity_id)
    if instance is None:
        raise NotFoundError(f"{label} not found.")
    return instance


def ensure_owner(instance, actor_id: str, action: str, label: str) -> None:
    """Raise ForbiddenError unless actor_id owns the row."""
    if instance.owner_id != actor_id:
        raise ForbiddenError(f"You do not have permission to {action} this {label}.")


def ensure_content_exists(db: Session, ref: ParentRef) -> None:
    """Raise NotFoundError when the referenced video/comment/tweet is missing."""
    model = CONTENT_MODELS[ref.kind]
    found = db.scalar(select(model.id).where(model.id == ref.id))
    if found is None:
        raise NotFoundError(f"{ref.kind.value.capitalize()} not found.")
