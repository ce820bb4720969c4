import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from ..db import get_db
from ..models import Candidate
from ..schemas import CandidateIn, CandidateOut
from ..search.store import SqlCandidateStore
from ..security import get_owner_restriction

logger = logging.getLogger(__name__)

router = APIRouter()

def _get_visible(db: Session, candidate_id: int, owner: Optional[int]) -> Candidate:
    cand = SqlCandidateStore(db).find_by_id(candidate_id)
    if not cand or (owner is not None and cand.source_hr_id != owner):
        raise HTTPException(status_code=404, detail="Candidate not found")
    return cand

@router.get("/{candidate_id}", response_model=CandidateOut)
def get_candidate(
    candidate_id: int,
    owner: Optional[int] = Depends(get_owner_restriction),
    db: Session = Depends(get_db),
):
    return _get_visible(db, candidate_id, owner)

@router.post("", response_model=CandidateOut, status_code=201)
def create_candidate(
    body: CandidateIn,
    owner: Optional[int] = Depends(get_owner_restriction),
    db: Session = Depends(get_db),
):
    data = body.model_dump(exclude_none=True)
    if owner is not None:
        data["source_hr_id"] = owner
    cand = Candidate(**data)
    db.add(cand)
    db.commit()
    db.refresh(cand)
    logger.info("Created candidate %s", cand.id)
    return cand

@router.patch("/{candidate_id}", response_model=CandidateOut)
def update_candidate(
    candidate_id: int,
    body: CandidateIn,
    owner: Optional[int] = Depends(get_owner_restriction),
    db: Session = Depends(get_db),
):
    cand = _get_visible(db, candidate_id, owner)
    changes = body.model_dump(exclude_unset=True)
    if owner is not None:
        changes.pop("source_hr_id", None)
    for key, value in changes.items():
        setattr(cand, key, value)
    db.commit()
    db.refresh(cand)
    return cand
