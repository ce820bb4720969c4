from typing import List, Optional, Protocol, Sequence, Tuple

from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from ..models import Candidate


class CandidateStore(Protocol):
    def find_matching(
        self,
        predicate: ColumnElement,
        page: int = 1,
        page_size: Optional[int] = None,
        sort: Sequence[ColumnElement] = (),
    ) -> Tuple[List[Candidate], int]:
        ...

    def find_by_id(self, candidate_id: int) -> Optional[Candidate]:
        ...


class SqlCandidateStore:
    """Candidate lookups over a SQLAlchemy session.

    ``page_size=None`` returns every matching row; the total is then the
    number of rows fetched and no separate count query runs.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_matching(self, predicate, page=1, page_size=None, sort=()):
        q = self.db.query(Candidate).filter(predicate)
        if page_size is None:
            rows = q.order_by(*sort).all()
            return rows, len(rows)
        total = q.count()
        rows = q.order_by(*sort).offset((page - 1) * page_size).limit(page_size).all()
        return rows, total

    def find_by_id(self, candidate_id):
        return self.db.query(Candidate).filter(Candidate.id == candidate_id).first()
