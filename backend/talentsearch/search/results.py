import os
import re
from typing import Optional

from ..extract.text import search_term
from ..models import Candidate, CandidateStatus
from ..schemas import CandidateResult

HIGHLIGHT_OPEN = os.getenv("SEARCH_HIGHLIGHT_OPEN", "<mark>")
HIGHLIGHT_CLOSE = os.getenv("SEARCH_HIGHLIGHT_CLOSE", "</mark>")


def highlight(text: str, query: Optional[str]) -> str:
    """Wrap the first case-insensitive occurrence of ``query`` in ``text``."""
    q = search_term(query)
    if not q:
        return text
    m = re.search(re.escape(q), text, re.IGNORECASE)
    if not m:
        return text
    return f"{text[:m.start()]}{HIGHLIGHT_OPEN}{m.group(0)}{HIGHLIGHT_CLOSE}{text[m.end():]}"


def display_text(c: Candidate) -> str:
    return f"{c.first_name or ''} {c.last_name or ''} - {c.skills or ''}"


def to_result(c: Candidate, query: Optional[str] = None) -> CandidateResult:
    status = c.status or CandidateStatus.PENDING
    return CandidateResult(
        id=c.id,
        first_name=c.first_name,
        last_name=c.last_name,
        email=c.email,
        phone=c.phone,
        profile=c.profile,
        company=c.company,
        experience=c.experience,
        experience_level=c.experience_level,
        current_package=c.current_package,
        expected_ctc=c.expected_ctc,
        location=c.location,
        notice_period=c.notice_period,
        primary_skills=c.skills,
        education=c.education,
        degree=c.degree,
        passing_year=c.passing_year,
        percentage=c.percentage,
        gap=c.gap,
        employment_history=c.employment_history,
        status=CandidateStatus(status).value,
        updated_at=c.updated_at,
        highlighted_text=highlight(display_text(c), query),
    )
