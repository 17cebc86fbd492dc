"""Derived-field and reshaping stages.

These stages read only what earlier Lookup stages already embedded into a
document; none of them touches the database.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Count:
    """Size of an embedded array (0 when missing)."""

    name: str
    source: str

    def compute(self, doc: dict) -> int:
        value = doc.get(self.source)
        return len(value) if value else 0


@dataclass(frozen=True)
class Contains:
    """Whether value appears under key in any element of an embedded array.

    A value of None (anonymous actor) never matches.
    """

    name: str
    source: str
    key: str
    value: Any

    def compute(self, doc: dict) -> bool:
        if self.value is None:
            return False
        return any(item.get(self.key) == self.value for item in doc.get(self.source) or ())


@dataclass(frozen=True)
class First:
    """First element of an embedded array, or None."""

    name: str
    source: str

    def compute(self, doc: dict) -> Any:
        value = doc.get(self.source)
        if isinstance(value, list):
            return value[0] if value else None
        return value


@dataclass(frozen=True)
class Sum:
    """Sum of a numeric key across an embedded array."""

    name: str
    source: str
    key: str

    def compute(self, doc: dict) -> int | float:
        return sum(item.get(self.key) or 0 for item in doc.get(self.source) or ())


class AddFields:
    """Stage adding computed fields to every document."""

    def __init__(self, *computations):
        self.computations = computations

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(c.name for c in self.computations)

    def apply(self, docs: list[dict]) -> list[dict]:
        for doc in docs:
            # Computations run in order, so later ones may read earlier results
            for computation in self.computations:
                doc[computation.name] = computation.compute(doc)
        return docs


class Project:
    """Stage keeping only the named keys of every document."""

    def __init__(self, *keys: str):
        self.keys = keys

    def apply(self, docs: list[dict]) -> list[dict]:
        return [{key: doc[key] for key in self.keys if key in doc} for doc in docs]


class ReplaceRoot:
    """Stage promoting an embedded object to the document itself.

    Documents whose embedded object is missing are dropped.
    """

    def __init__(self, source: str):
        self.source = source

    def apply(self, docs: list[dict]) -> list[dict]:
        return [doc[self.source] for doc in docs if doc.get(self.source) is not None]
