"""View pipelines: match -> sort -> (skip/limit) -> join/derive/project.

Matching, sorting and slicing run in SQL against the root model; join
expansion and derived fields then run over the selected rows only, so a page
never expands rows it does not return. Totals come from a separate count over
the match predicate alone.
"""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from vidtube.composer.lookup import run_stages, to_document
from vidtube.composer.match import Match
from vidtube.composer.pagination import Page, PageRequest, SortSpec


class ViewPipeline:
    """Declarative read model over one root model."""

    def __init__(self, match: Match, stages: tuple | list = (), sort: SortSpec | None = None):
        self.match = match
        self.model = match.model
        self.stages = tuple(stages)
        self.sort = sort

    def _select(self):
        stmt = select(self.model).where(self.match.predicate())
        if self.sort is not None:
            column = getattr(self.model, self.sort.column)
            tie_breaker = self.model.id
            if self.sort.descending:
                stmt = stmt.order_by(column.desc(), tie_breaker.desc())
            else:
                stmt = stmt.order_by(column.asc(), tie_breaker.asc())
        return stmt

    def _compose(self, session: Session, rows) -> list[dict]:
        docs = [to_document(row) for row in rows]
        return run_stages(session, docs, self.stages)

    def all(self, session: Session) -> list[dict]:
        """Every matching document, fully expanded."""
        return self._compose(session, session.scalars(self._select()).all())

    def first(self, session: Session) -> dict | None:
        """First matching document, or None."""
        docs = self._compose(session, session.scalars(self._select().limit(1)).all())
        return docs[0] if docs else None

    def count(self, session: Session) -> int:
        """Number of rows matching the predicate (no joins)."""
        stmt = select(func.count()).select_from(self.model).where(self.match.predicate())
        return session.scalar(stmt) or 0

    def paginate(self, session: Session, request: PageRequest) -> Page:
        """One page of expanded documents plus totals."""
        total = self.count(session)
        rows = []
        if request.offset < total:
            stmt = self._select().offset(request.offset).limit(request.limit)
            rows = session.scalars(stmt).all()
        return Page(
            items=self._compose(session, rows),
            total=total,
            page=request.page,
            limit=request.limit,
        )
