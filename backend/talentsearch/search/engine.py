"""
Candidate search orchestration.

Two evaluation strategies share one entry point:

* storage-only: every filter is expressible in SQL, so the database pages
  and counts;
* hybrid: some filters need numbers parsed from free text. The whole
  matching set is fetched, filtered in memory, then paginated here so
  totals and page boundaries stay correct.

Searches never raise. Failures are logged and come back as an empty page
carrying the error message.
"""

import logging
import math
import os
import time
from typing import Any, List, Mapping, Optional, Sequence, Union

from sqlalchemy.sql.elements import ColumnElement

from ..extract.numbers import parse_currency, parse_experience
from ..models import Candidate
from ..schemas import SearchFilters, SearchPage
from .predicates import (
    DERIVED_FILTERS,
    CurrencyRange,
    MinExperience,
    ResidualFilter,
    build_predicate,
)
from .results import to_result
from .store import CandidateStore

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = int(os.getenv("SEARCH_DEFAULT_PAGE_SIZE", "20"))

DEFAULT_SORT = "latest"

SORTS = {
    "latest": (Candidate.updated_at.desc(), Candidate.id.desc()),
    "experienceHigh": (Candidate.experience.desc(), Candidate.id.asc()),
    "experienceLow": (Candidate.experience.asc(), Candidate.id.asc()),
    "salaryHigh": (Candidate.current_package.desc(), Candidate.id.asc()),
    "name": (Candidate.first_name.asc(), Candidate.last_name.asc(), Candidate.id.asc()),
}


def resolve_sort(sort_by: Optional[str]) -> Sequence[ColumnElement]:
    return SORTS.get(sort_by or DEFAULT_SORT, SORTS[DEFAULT_SORT])


def resolve_quick_sort(sort_by: Optional[str], direction: Optional[str]) -> Sequence[ColumnElement]:
    ascending = (direction or "").upper() == "ASC"

    def order(col):
        return col.asc() if ascending else col.desc()

    if sort_by == "name":
        return (order(Candidate.first_name), order(Candidate.last_name), order(Candidate.id))
    return (order(Candidate.created_at), order(Candidate.id))


def total_pages(total_count: int, page_size: int) -> int:
    return max(1, math.ceil(total_count / page_size))


def passes(c: Candidate, rule: ResidualFilter) -> bool:
    if isinstance(rule, MinExperience):
        # Empty experience never meets a minimum, unlike unparseable salaries.
        if not c.experience or not c.experience.strip():
            return False
        return parse_experience(c.experience) >= rule.years
    if isinstance(rule, CurrencyRange):
        amount = parse_currency(getattr(c, rule.field))
        if amount is None:
            return True
        if rule.minimum is not None and amount < rule.minimum:
            return False
        if rule.maximum is not None and amount > rule.maximum:
            return False
        return True
    raise TypeError(f"unknown residual filter: {rule!r}")


def apply_residual(rows: List[Candidate], residual: List[ResidualFilter]) -> List[Candidate]:
    return [c for c in rows if all(passes(c, rule) for rule in residual)]


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def _error_page(page: int, exc: Exception, started: float) -> SearchPage:
    return SearchPage(
        results=[],
        total_count=0,
        page=page,
        total_pages=0,
        execution_time_ms=_elapsed_ms(started),
        error=str(exc) or exc.__class__.__name__,
    )


def _check_paging(page: int, page_size: int) -> None:
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")


def search_candidates(
    store: CandidateStore,
    query: Optional[str] = "",
    filters: Union[SearchFilters, Mapping[str, Any], None] = None,
    sort_by: Optional[str] = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    owner_restriction: Optional[int] = None,
) -> SearchPage:
    started = time.perf_counter()
    try:
        _check_paging(page, page_size)
        if isinstance(filters, SearchFilters):
            parsed = filters
        else:
            parsed = SearchFilters.model_validate(dict(filters or {}))

        predicate, residual = build_predicate(parsed, owner_restriction, query or "")
        sort = resolve_sort(sort_by)

        if not residual:
            rows, total = store.find_matching(predicate.clause(), page, page_size, sort)
            logger.info(
                "Search (storage): page=%s size=%s returned=%s total=%s",
                page, page_size, len(rows), total,
            )
        else:
            fetched, _ = store.find_matching(predicate.clause(), 1, None, sort)
            matched = apply_residual(fetched, residual)
            total = len(matched)
            skip = (page - 1) * page_size
            rows = matched[skip:skip + page_size]
            derived = sorted(k for k in parsed.model_dump(by_alias=True, exclude_defaults=True) if k in DERIVED_FILTERS)
            logger.info(
                "Search (hybrid %s): fetched=%s matched=%s page=%s size=%s",
                ",".join(derived), len(fetched), total, page, page_size,
            )

        return SearchPage(
            results=[to_result(c, query) for c in rows],
            total_count=total,
            page=page,
            total_pages=total_pages(total, page_size),
            execution_time_ms=_elapsed_ms(started),
        )
    except Exception as exc:
        logger.exception("Candidate search failed")
        return _error_page(page, exc, started)


def quick_search(
    store: CandidateStore,
    query: Optional[str] = "",
    sort_by: Optional[str] = None,
    sort_direction: Optional[str] = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    owner_restriction: Optional[int] = None,
) -> SearchPage:
    """Free-text lookup sorted by creation date or name, always paged in SQL."""
    started = time.perf_counter()
    try:
        _check_paging(page, page_size)
        predicate, _ = build_predicate(SearchFilters(), owner_restriction, query or "")
        rows, total = store.find_matching(
            predicate.clause(), page, page_size, resolve_quick_sort(sort_by, sort_direction)
        )
        return SearchPage(
            results=[to_result(c, query) for c in rows],
            total_count=total,
            page=page,
            total_pages=total_pages(total, page_size),
            execution_time_ms=_elapsed_ms(started),
        )
    except Exception as exc:
        logger.exception("Quick search failed")
        return _error_page(page, exc, started)
