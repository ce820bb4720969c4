import os
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from ..db import get_db
from ..schemas import SearchPage, SearchRequest
from ..search.engine import DEFAULT_PAGE_SIZE, quick_search, search_candidates
from ..search.store import SqlCandidateStore
from ..security import get_owner_restriction

MAX_PAGE_SIZE = int(os.getenv("SEARCH_MAX_PAGE_SIZE", "100"))

router = APIRouter()

@router.post("/advanced-search", response_model=SearchPage)
def advanced_search(
    body: SearchRequest,
    owner: Optional[int] = Depends(get_owner_restriction),
    db: Session = Depends(get_db),
):
    page_size = min(body.page_size or DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE)
    return search_candidates(
        SqlCandidateStore(db),
        query=body.query,
        filters=body.filters,
        sort_by=body.sort_by,
        page=body.page,
        page_size=page_size,
        owner_restriction=owner,
    )

@router.get("/search", response_model=SearchPage)
def search(
    q: str = "",
    sort_by: Optional[str] = None,
    sort_direction: Optional[str] = None,
    page: int = Query(1, ge=1),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    owner: Optional[int] = Depends(get_owner_restriction),
    db: Session = Depends(get_db),
):
    return quick_search(
        SqlCandidateStore(db),
        query=q,
        sort_by=sort_by,
        sort_direction=sort_direction,
        page=page,
        page_size=size,
        owner_restriction=owner,
    )
