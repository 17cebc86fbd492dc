"""Match stage construction.

A Match is an immutable conjunction of SQLAlchemy predicates over one model.
MatchBuilder assembles it from optional request parameters and validates
identifier-shaped inputs up front, so a malformed id fails loudly instead of
silently matching nothing.
"""

import re
from dataclasses import dataclass
from typing import Any

from sqlalchemy import and_, or_, true

from vidtube.exceptions import InvalidArgumentError
from vidtube.models.common import ContentType

_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def is_valid_id(value: Any) -> bool:
    """Return True if value looks like an entity identifier."""
    return isinstance(value, str) and bool(_ID_PATTERN.match(value))


def ensure_valid_id(value: Any, label: str = "ID") -> str:
    """Return value unchanged or raise InvalidArgumentError."""
    if not is_valid_id(value):
        raise InvalidArgumentError(f"Invalid {label}.")
    return value


@dataclass(frozen=True)
class ParentRef:
    """Explicit reference to the content a comment or like belongs to."""

    kind: ContentType
    id: str


def resolve_parent(
    *,
    video_id: str | None = None,
    comment_id: str | None = None,
    tweet_id: str | None = None,
    allowed: tuple[ContentType, ...] = tuple(ContentType),
) -> ParentRef:
    """
    Turn a set of optional parent ids into exactly one ParentRef.

    Args:
        video_id: Candidate video parent
        comment_id: Candidate comment parent
        tweet_id: Candidate tweet parent
        allowed: Parent kinds accepted by the caller

    Returns:
        The single supplied parent

    Raises:
        InvalidArgumentError: No parent, more than one parent, a parent kind
            the caller does not accept, or a malformed id
    """
    candidates = [
        (kind, value)
        for kind, value in (
            (ContentType.VIDEO, video_id),
            (ContentType.COMMENT, comment_id),
            (ContentType.TWEET, tweet_id),
        )
        if value is not None
    ]

    names = " or ".join(kind.value for kind in allowed)
    if len(candidates) != 1:
        raise InvalidArgumentError(f"Exactly one {names} ID is required.")

    kind, value = candidates[0]
    if kind not in allowed:
        raise InvalidArgumentError(f"Exactly one {names} ID is required.")

    return ParentRef(kind=kind, id=ensure_valid_id(value, f"{kind.value.capitalize()} ID"))


@dataclass(frozen=True)
class Match:
    """Conjunction of predicates for one model."""

    model: type
    clauses: tuple = ()

    def predicate(self):
        """Single AND-ed predicate (always-true when empty)."""
        if not self.clauses:
            return true()
        return and_(*self.clauses)


class MatchBuilder:
    """Fluent builder for a Match; each call adds one AND-ed predicate."""

    def __init__(self, model: type):
        self.model = model
        self._clauses: list = []

    def where(self, *clauses) -> "MatchBuilder":
        self._clauses.extend(clauses)
        return self

    def equals(self, field: str, value: Any) -> "MatchBuilder":
        self._clauses.append(getattr(self.model, field) == value)
        return self

    def id_equals(self, field: str, value: Any, label: str = "ID") -> "MatchBuilder":
        """Foreign-key equality on a validated identifier."""
        return self.equals(field, ensure_valid_id(value, label))

    def owned_by(self, owner_id: str | None, label: str = "User ID") -> "MatchBuilder":
        """Restrict to rows owned by owner_id; no-op when owner_id is None."""
        if owner_id is None:
            return self
        return self.id_equals("owner_id", owner_id, label)

    def published(self, required: bool | None = True) -> "MatchBuilder":
        """Restrict on publication state; None means either state."""
        if required is None:
            return self
        self._clauses.append(self.model.is_published.is_(required))
        return self

    def search(
        self, text: str | None, fields: tuple[str, ...] = ("title", "description")
    ) -> "MatchBuilder":
        """Case-insensitive search: every term must appear in one of the fields."""
        if not text or not text.strip():
            return self
        for term in text.split():
            pattern = f"%{term}%"
            self._clauses.append(
                or_(*(getattr(self.model, field).ilike(pattern) for field in fields))
            )
        return self

    def parent(
        self,
        ref: ParentRef,
        type_field: str = "parent_type",
        id_field: str = "parent_id",
    ) -> "MatchBuilder":
        """Match rows pointing at an explicit parent reference."""
        self._clauses.append(getattr(self.model, type_field) == ref.kind)
        self._clauses.append(getattr(self.model, id_field) == ref.id)
        return self

    def build(self) -> Match:
        return Match(model=self.model, clauses=tuple(self._clauses))
