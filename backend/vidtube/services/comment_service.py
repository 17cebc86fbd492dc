"""Comments on videos and tweets."""

from sqlalchemy import delete
from sqlalchemy.orm import Session

from vidtube.composer import (
    MatchBuilder,
    Page,
    PageRequest,
    ParentRef,
    SortSpec,
    ViewPipeline,
    ensure_valid_id,
)
from vidtube.exceptions import InvalidArgumentError
from vidtube.models import Comment, ContentType, Like
from vidtube.services.common import (
    ensure_content_exists,
    ensure_owner,
    get_or_404,
    like_fields,
    likes_lookup,
    owner_lookup,
)


def _require_content(content: str | None) -> str:
    text = (content or "").strip()
    if not text:
        raise InvalidArgumentError("Comment content is required.")
    return text


class CommentService:
    """Service for comment threads."""

    @staticmethod
    def list_for(
        db: Session, parent: ParentRef, actor_id: str | None, page: PageRequest
    ) -> Page:
        """Newest-first comments of a video or tweet, with author and likes."""
        ensure_content_exists(db, parent)
        pipeline = ViewPipeline(
            MatchBuilder(Comment).parent(parent).build(),
            stages=(
                owner_lookup(),
                likes_lookup(ContentType.COMMENT),
                like_fields(actor_id),
            ),
            sort=SortSpec(),
        )
        return pipeline.paginate(db, page)

    @staticmethod
    def add(db: Session, actor_id: str, parent: ParentRef, content: str) -> Comment:
        """Add a comment; the parent video or tweet must exist."""
        text = _require_content(content)
        ensure_content_exists(db, parent)

        comment = Comment(
            content=text,
            owner_id=actor_id,
            parent_type=parent.kind,
            parent_id=parent.id,
        )
        db.add(comment)
        db.commit()
        db.refresh(comment)
        return comment

    @staticmethod
    def update(db: Session, actor_id: str, comment_id: str, content: str) -> Comment:
        text = _require_content(content)
        comment = get_or_404(db, Comment, ensure_valid_id(comment_id, "Comment ID"), "Comment")
        ensure_owner(comment, actor_id, "update", "comment")

        comment.content = text
        db.commit()
        db.refresh(comment)
        return comment

    @staticmethod
    def delete(db: Session, actor_id: str, comment_id: str) -> None:
        """Delete the actor's comment together with its likes."""
        comment = get_or_404(db, Comment, ensure_valid_id(comment_id, "Comment ID"), "Comment")
        ensure_owner(comment, actor_id, "delete", "comment")

        db.execute(
            delete(Like)
            .where(Like.target_type == ContentType.COMMENT, Like.target_id == comment.id)
            .execution_options(synchronize_session=False)
        )
        db.delete(comment)
        db.commit()
