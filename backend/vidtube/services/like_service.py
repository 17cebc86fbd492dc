"""Like toggles and the liked-videos view."""

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vidtube.composer import (
    Lookup,
    MatchBuilder,
    Page,
    PageRequest,
    ParentRef,
    ReplaceRoot,
    SortSpec,
    ViewPipeline,
)
from vidtube.logger import api_logger
from vidtube.models import ContentType, Like, Video
from vidtube.services.common import ensure_content_exists, owner_lookup


class LikeService:
    """Service for likes on videos, comments and tweets."""

    @staticmethod
    def toggle(db: Session, actor_id: str, target: ParentRef) -> bool:
        """
        Flip the actor's like on target.

        Deletes the like if present, otherwise inserts one. The unique index
        on (target, user) turns a concurrent duplicate insert into an
        IntegrityError, which means the target is liked either way.

        Returns:
            True if the target is now liked, False otherwise
        """
        ensure_content_exists(db, target)

        removed = db.execute(
            delete(Like)
            .where(
                Like.target_type == target.kind,
                Like.target_id == target.id,
                Like.user_id == actor_id,
            )
            .execution_options(synchronize_session=False)
        ).rowcount
        if removed:
            db.commit()
            return False

        db.add(Like(user_id=actor_id, target_type=target.kind, target_id=target.id))
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            api_logger.debug(
                f"Concurrent like on {target.kind.value} {target.id} by {actor_id}"
            )
        return True

    @staticmethod
    def liked_videos(db: Session, actor_id: str, page: PageRequest) -> Page:
        """Videos the actor liked, most recent like first."""
        pipeline = ViewPipeline(
            MatchBuilder(Like)
            .equals("user_id", actor_id)
            .equals("target_type", ContentType.VIDEO)
            .build(),
            stages=(
                Lookup(
                    Video,
                    local_field="target_id",
                    as_field="video",
                    pipeline=(owner_lookup(),),
                    first=True,
                ),
                ReplaceRoot("video"),
            ),
            sort=SortSpec(),
        )
        return pipeline.paginate(db, page)
