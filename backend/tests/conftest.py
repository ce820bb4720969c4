import os
import sys
from datetime import datetime, timedelta
from pathlib import Path

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

import pytest
from fastapi.testclient import TestClient

from talentsearch.db import Base, SessionLocal, engine
from talentsearch.main import app
from talentsearch.models import Candidate
from talentsearch.search.store import SqlCandidateStore


@pytest.fixture(autouse=True)
def clean_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db):
    return SqlCandidateStore(db)


@pytest.fixture
def make_candidate(db):
    """Insert a candidate; each call is one minute newer than the last."""
    base = datetime(2024, 1, 1, 9, 0, 0)
    created = []

    def _make(**fields):
        stamp = base + timedelta(minutes=len(created))
        fields.setdefault("first_name", f"Candidate{len(created)}")
        fields.setdefault("last_name", "Test")
        fields.setdefault("created_at", stamp)
        fields.setdefault("updated_at", stamp)
        cand = Candidate(**fields)
        db.add(cand)
        db.commit()
        db.refresh(cand)
        created.append(cand)
        return cand

    return _make
