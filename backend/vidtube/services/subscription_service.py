"""Channel subscriptions."""

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vidtube.composer import (
    MatchBuilder,
    Page,
    PageRequest,
    ReplaceRoot,
    SortSpec,
    ViewPipeline,
    ensure_valid_id,
)
from vidtube.exceptions import InvalidArgumentError
from vidtube.logger import api_logger
from vidtube.models import Subscription, User
from vidtube.services.common import get_or_404, owner_lookup


class SubscriptionService:
    """Service for subscriber/channel edges."""

    @staticmethod
    def toggle(db: Session, actor_id: str, channel_id: str) -> bool:
        """
        Subscribe the actor to channel_id, or unsubscribe if already subscribed.

        Returns:
            True if the actor is now subscribed

        Raises:
            InvalidArgumentError: Malformed id or subscribing to oneself
            NotFoundError: Channel does not exist
        """
        channel_id = ensure_valid_id(channel_id, "Channel ID")
        if channel_id == actor_id:
            raise InvalidArgumentError("You cannot subscribe to your own channel.")
        get_or_404(db, User, channel_id, "Channel")

        removed = db.execute(
            delete(Subscription)
            .where(
                Subscription.subscriber_id == actor_id,
                Subscription.channel_id == channel_id,
            )
            .execution_options(synchronize_session=False)
        ).rowcount
        if removed:
            db.commit()
            return False

        db.add(Subscription(subscriber_id=actor_id, channel_id=channel_id))
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            api_logger.debug(f"Concurrent subscribe of {actor_id} to {channel_id}")
        return True

    @staticmethod
    def subscribers(db: Session, channel_id: str, page: PageRequest) -> Page:
        """Users subscribed to a channel, newest subscription first."""
        channel_id = ensure_valid_id(channel_id, "Channel ID")
        get_or_404(db, User, channel_id, "Channel")
        pipeline = ViewPipeline(
            MatchBuilder(Subscription).equals("channel_id", channel_id).build(),
            stages=(
                owner_lookup(local_field="subscriber_id", as_field="subscriber"),
                ReplaceRoot("subscriber"),
            ),
            sort=SortSpec(),
        )
        return pipeline.paginate(db, page)

    @staticmethod
    def subscribed_channels(db: Session, subscriber_id: str, page: PageRequest) -> Page:
        """Channels a user subscribes to, newest subscription first."""
        subscriber_id = ensure_valid_id(subscriber_id, "Subscriber ID")
        get_or_404(db, User, subscriber_id, "Subscriber")
        pipeline = ViewPipeline(
            MatchBuilder(Subscription).equals("subscriber_id", subscriber_id).build(),
            stages=(
                owner_lookup(local_field="channel_id", as_field="channel"),
                ReplaceRoot("channel"),
            ),
            sort=SortSpec(),
        )
        return pipeline.paginate(db, page)
