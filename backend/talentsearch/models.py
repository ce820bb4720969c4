import enum
import json
import logging
from datetime import datetime, timedelta

from sqlalchemy import Column, DateTime, Enum, Float, Integer, String, Text, event
from .db import Base

logger = logging.getLogger(__name__)


class CandidateStatus(str, enum.Enum):
    PENDING = "PENDING"
    INTERESTED = "INTERESTED"
    NOT_INTERESTED = "NOT_INTERESTED"
    TELL_LATER = "TELL_LATER"
    CONTACTED = "CONTACTED"
    OFFERED = "OFFERED"
    HIRED = "HIRED"


class Candidate(Base):
    __tablename__ = "candidates"
    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(80), index=True)
    last_name = Column(String(80), index=True)
    email = Column(String(120), index=True)
    phone = Column(String(20), index=True)
    location = Column(String(120))
    company = Column(String(120))
    profile = Column(String(120))
    degree = Column(String(80))
    passing_year = Column(Integer)
    percentage = Column(Float)
    experience = Column(String(50))
    current_package = Column(String(50))
    expected_ctc = Column(String(50))
    gap = Column(String(50))
    skills = Column(Text)
    resume_url = Column(String(255))
    status = Column(
        Enum(CandidateStatus, native_enum=False, length=32),
        nullable=False,
        default=CandidateStatus.PENDING,
        index=True,
    )
    source_hr_id = Column(Integer, index=True)
    notes = Column(Text)
    hr_remark = Column(Text)
    admin_remark = Column(Text)
    employment_history = Column(Text)
    education = Column(Text)
    experience_level = Column(String(120))
    notice_period = Column(String(50))
    created_at = Column(DateTime, index=True)
    updated_at = Column(DateTime, index=True)

    def update_percentage_from_education(self) -> None:
        """Copy ``percentage`` out of the education JSON blob when present.

        Blank education, invalid JSON and non-numeric values leave the
        current percentage untouched.
        """
        if not self.education or not self.education.strip():
            return
        try:
            data = json.loads(self.education)
        except json.JSONDecodeError:
            logger.debug("Ignoring non-JSON education for candidate %s", self.id)
            return
        if not isinstance(data, dict) or data.get("percentage") is None:
            return
        try:
            self.percentage = float(data["percentage"])
        except (TypeError, ValueError):
            return


@event.listens_for(Candidate, "before_insert")
def _on_create(mapper, connection, target):
    now = datetime.now()
    if target.created_at is None:
        target.created_at = now
    if target.updated_at is None:
        target.updated_at = now
    if target.status is None:
        target.status = CandidateStatus.PENDING
    target.update_percentage_from_education()


@event.listens_for(Candidate, "before_update")
def _on_update(mapper, connection, target):
    now = datetime.now()
    # updated_at must strictly increase even when the clock has not moved.
    if target.updated_at is not None and now <= target.updated_at:
        now = target.updated_at + timedelta(microseconds=1)
    target.updated_at = now
    if target.status is None:
        target.status = CandidateStatus.PENDING
    target.update_percentage_from_education()
