import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Enum


def new_id() -> str:
    """Generate an opaque entity identifier (32 lowercase hex chars)."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class ContentType(str, enum.Enum):
    """Kinds of content a comment or like can point at."""

    VIDEO = "video"
    COMMENT = "comment"
    TWEET = "tweet"


def content_type_column_type() -> Enum:
    """Column type storing ContentType by value."""
    return Enum(
        ContentType,
        native_enum=False,
        length=16,
        values_callable=lambda kinds: [kind.value for kind in kinds],
    )
