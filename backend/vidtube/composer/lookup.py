"""Join expansion.

A Lookup embeds rows of a related model into each parent document, keyed by
local-field == foreign-field equality. Related rows for the whole batch of
parents are fetched with a single IN query, optionally routed through an
association table when the relation is an ordered set.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Iterable

from sqlalchemy import inspect, select
from sqlalchemy.orm import Session


def to_document(instance) -> dict:
    """Plain dict of an ORM instance's column attributes."""
    mapper = inspect(instance).mapper
    return {attr.key: getattr(instance, attr.key) for attr in mapper.column_attrs}


@dataclass(frozen=True)
class Through:
    """Association table routing an array-valued relation.

    Rows of `model` link `local_key` (the parent's id) to `foreign_key`
    (the related row's id); `order_by` fixes the order of the embedded array.
    """

    model: type
    local_key: str
    foreign_key: str
    order_by: str


@dataclass(frozen=True)
class Lookup:
    """Embed related rows of `model` into the `as_field` of each document.

    Attributes:
        model: Related model
        local_field: Document key holding the join value (scalar or list)
        as_field: Document key receiving the embedded rows
        foreign_field: Related model column compared with local_field
        fields: Whitelisted keys kept on each embedded row (empty keeps all)
        where: Extra equality criteria on the related model
        order_by: (column, descending) pairs ordering embedded rows
        pipeline: Stages run over the related rows before projection
        first: Embed a single object (or None) instead of a list
        through: Association table for ordered-set relations
    """

    model: type
    local_field: str
    as_field: str
    foreign_field: str = "id"
    fields: tuple[str, ...] = ()
    where: dict[str, Any] = field(default_factory=dict)
    order_by: tuple[tuple[str, bool], ...] = ()
    pipeline: tuple = ()
    first: bool = False
    through: Through | None = None

    def _project(self, doc: dict) -> dict:
        if not self.fields:
            return dict(doc)
        return {key: doc[key] for key in self.fields if key in doc}

    def _fetch(self, session: Session, keys: Iterable[Any]) -> list[dict]:
        keys = list(keys)
        if not keys:
            return []

        stmt = select(self.model).where(getattr(self.model, self.foreign_field).in_(keys))
        for column, value in self.where.items():
            stmt = stmt.where(getattr(self.model, column) == value)
        for column, descending in self.order_by:
            attr = getattr(self.model, column)
            stmt = stmt.order_by(attr.desc() if descending else attr.asc())

        docs = [to_document(row) for row in session.scalars(stmt).all()]
        return run_stages(session, docs, self.pipeline)

    def _local_keys(self, doc: dict) -> list[Any]:
        value = doc.get(self.local_field)
        if value is None:
            return []
        if isinstance(value, (list, tuple, set)):
            return list(value)
        return [value]

    def _attach(self, doc: dict, matches: list[dict]) -> None:
        if self.first:
            doc[self.as_field] = matches[0] if matches else None
        else:
            doc[self.as_field] = matches

    def expand(self, session: Session, docs: list[dict]) -> list[dict]:
        """Embed related rows into every document of the batch."""
        if not docs:
            return docs

        if self.through is not None:
            return self._expand_through(session, docs)

        keys = {key for doc in docs for key in self._local_keys(doc)}
        grouped: dict[Any, list[dict]] = defaultdict(list)
        for related in self._fetch(session, keys):
            grouped[related.get(self.foreign_field)].append(self._project(related))

        for doc in docs:
            matches = [m for key in self._local_keys(doc) for m in grouped.get(key, ())]
            self._attach(doc, matches)
        return docs

    def _expand_through(self, session: Session, docs: list[dict]) -> list[dict]:
        link_model = self.through.model
        local_col = getattr(link_model, self.through.local_key)
        foreign_col = getattr(link_model, self.through.foreign_key)

        parent_keys = {key for doc in docs for key in self._local_keys(doc)}
        links: dict[Any, list[Any]] = defaultdict(list)
        if parent_keys:
            stmt = (
                select(local_col, foreign_col)
                .where(local_col.in_(parent_keys))
                .order_by(getattr(link_model, self.through.order_by).asc())
            )
            for parent_key, target_key in session.execute(stmt):
                links[parent_key].append(target_key)

        target_keys = {key for targets in links.values() for key in targets}
        by_key = {
            related.get(self.foreign_field): self._project(related)
            for related in self._fetch(session, target_keys)
        }

        for doc in docs:
            matches = [
                dict(by_key[target])
                for key in self._local_keys(doc)
                for target in links.get(key, ())
                if target in by_key
            ]
            self._attach(doc, matches)
        return docs


def run_stages(session: Session, docs: list[dict], stages: Iterable) -> list[dict]:
    """Run pipeline stages in order over a batch of documents."""
    for stage in stages:
        if isinstance(stage, Lookup):
            docs = stage.expand(session, docs)
        else:
            docs = stage.apply(docs)
    return docs
